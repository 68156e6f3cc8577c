import unittest

from services.industry import BusinessProfile, IndustryCategory, resolve_industry_category


class ResolveIndustryCategoryTests(unittest.TestCase):
    def test_category_names_match_case_insensitively(self):
        self.assertEqual(resolve_industry_category("Retail clothing"), IndustryCategory.RETAIL)
        self.assertEqual(resolve_industry_category("TECHNOLOGY consulting"), IndustryCategory.TECHNOLOGY)
        self.assertEqual(resolve_industry_category("Food Manufacturing"), IndustryCategory.MANUFACTURING)
        self.assertEqual(resolve_industry_category("Healthcare"), IndustryCategory.HEALTHCARE)
        self.assertEqual(resolve_industry_category("Finance"), IndustryCategory.FINANCE)

    def test_synonyms(self):
        self.assertEqual(resolve_industry_category("SaaS / Software"), IndustryCategory.TECHNOLOGY)
        self.assertEqual(resolve_industry_category("Community bank"), IndustryCategory.FINANCE)
        self.assertEqual(resolve_industry_category("Dental clinic"), IndustryCategory.HEALTHCARE)

    def test_fintech_is_finance_not_technology(self):
        self.assertEqual(resolve_industry_category("Fintech"), IndustryCategory.FINANCE)

    def test_unknown_and_blank_fall_back_to_other(self):
        self.assertEqual(resolve_industry_category("Energy"), IndustryCategory.OTHER)
        self.assertEqual(resolve_industry_category(""), IndustryCategory.OTHER)
        self.assertEqual(resolve_industry_category(None), IndustryCategory.OTHER)


class BusinessProfileTests(unittest.TestCase):
    def test_incomplete_fields_give_no_profile(self):
        self.assertIsNone(BusinessProfile.from_fields("Energy", None))
        self.assertIsNone(BusinessProfile.from_fields("  ", "Texas"))

    def test_stored_category_is_used(self):
        profile = BusinessProfile.from_fields("Energy", "Texas", "finance")
        self.assertEqual(profile.category, IndustryCategory.FINANCE)

    def test_invalid_stored_category_is_resolved_again(self):
        profile = BusinessProfile.from_fields(" Retail ", " Ohio ", "bogus")
        self.assertEqual(profile, BusinessProfile("Retail", "Ohio", IndustryCategory.RETAIL))


if __name__ == "__main__":
    unittest.main()
