import unittest

from app.validators import (
    business_domain,
    is_valid_business_url,
    normalize_business_url,
    validate_business_url,
)


class BusinessUrlTests(unittest.TestCase):
    def test_accepts_common_forms(self):
        for url in (
            "acme.com",
            "www.acme.com",
            "https://acme.co.uk/about",
            "http://my-shop.store",
            "  acme.io  ",
        ):
            with self.subTest(url=url):
                self.assertTrue(is_valid_business_url(url))

    def test_rejects_bad_hosts(self):
        for url in (
            "",
            "   ",
            None,
            "localhost",
            "http://localhost:8000",
            "127.0.0.1",
            "acme",
            "a.b",
            "-acme.com",
            "acme.c",
            "not a url",
        ):
            with self.subTest(url=url):
                self.assertFalse(is_valid_business_url(url))

    def test_validate_strips_or_raises(self):
        self.assertEqual(validate_business_url("  acme.com "), "acme.com")
        with self.assertRaisesRegex(ValueError, "required"):
            validate_business_url(" ")
        with self.assertRaisesRegex(ValueError, "valid website URL"):
            validate_business_url("localhost")

    def test_normalize_adds_scheme_once(self):
        self.assertEqual(normalize_business_url("acme.com"), "https://acme.com")
        self.assertEqual(normalize_business_url("http://acme.com"), "http://acme.com")

    def test_business_domain_drops_www(self):
        self.assertEqual(business_domain("https://www.acme.com/pricing"), "acme.com")
        self.assertEqual(business_domain("shop.acme.com"), "shop.acme.com")
        self.assertEqual(business_domain("", default="Magnetize"), "Magnetize")
