from __future__ import annotations

import re
import unittest

from app.domain.ad_rows import EntityLevel, SemanticField
from app.mappers.column_resolver import ColumnResolver, resolve_column


class TestResolveColumn(unittest.TestCase):
    def test_first_matching_pattern_wins_over_column_order(self) -> None:
        patterns = [re.compile(r"^amount spent", re.I), re.compile(r"^cost$", re.I)]

        column = resolve_column(["Cost", "Amount spent (EUR)"], patterns)

        self.assertEqual(column, "Amount spent (EUR)")

    def test_later_patterns_used_only_when_earlier_match_nothing(self) -> None:
        patterns = [re.compile(r"^spend$", re.I), re.compile(r"^cost$", re.I)]

        self.assertEqual(resolve_column(["Campaign", "Cost"], patterns), "Cost")

    def test_returns_none_when_nothing_matches(self) -> None:
        patterns = [re.compile(r"^spend$", re.I)]

        self.assertIsNone(resolve_column(["Campaign", "Reach"], patterns))
        self.assertIsNone(resolve_column([], patterns))


class TestColumnResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = ColumnResolver()

    def test_meta_english_export(self) -> None:
        columns = [
            "Campaign name",
            "Ad name",
            "Reporting starts",
            "Amount spent (EUR)",
            "Impressions",
            "Frequency",
            "Link clicks",
            "Clicks (all)",
            "Results",
            "Purchases",
            "Leads",
            "Purchases conversion value",
            "Landing page views",
        ]

        resolution = self.resolver.resolve_schema(columns)

        self.assertEqual(resolution.column_for(SemanticField.SPEND), "Amount spent (EUR)")
        self.assertEqual(resolution.column_for(SemanticField.IMPRESSIONS), "Impressions")
        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "Clicks (all)")
        self.assertEqual(resolution.column_for(SemanticField.LINK_CLICKS), "Link clicks")
        self.assertEqual(resolution.column_for(SemanticField.FREQUENCY), "Frequency")
        self.assertEqual(resolution.column_for(SemanticField.REVENUE), "Purchases conversion value")
        self.assertEqual(resolution.column_for(SemanticField.PURCHASES), "Purchases")
        self.assertEqual(resolution.column_for(SemanticField.LEADS), "Leads")
        self.assertEqual(resolution.column_for(SemanticField.GENERIC_CONVERSIONS), "Results")
        self.assertEqual(resolution.column_for(SemanticField.LANDING_PAGE_VIEWS), "Landing page views")
        self.assertEqual(resolution.column_for(SemanticField.DATE), "Reporting starts")
        self.assertEqual(resolution.unresolved, ())

    def test_latvian_export(self) -> None:
        columns = ["Datums", "Iztērētā summa (EUR)", "Rādījumi", "Klikšķi (visi)", "Rezultāti", "Biežums"]

        resolution = self.resolver.resolve_schema(columns)

        self.assertEqual(resolution.column_for(SemanticField.SPEND), "Iztērētā summa (EUR)")
        self.assertEqual(resolution.column_for(SemanticField.IMPRESSIONS), "Rādījumi")
        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "Klikšķi (visi)")
        self.assertEqual(resolution.column_for(SemanticField.GENERIC_CONVERSIONS), "Rezultāti")
        self.assertEqual(resolution.column_for(SemanticField.FREQUENCY), "Biežums")
        self.assertEqual(resolution.column_for(SemanticField.DATE), "Datums")

    def test_link_clicks_fill_in_for_missing_clicks(self) -> None:
        resolution = self.resolver.resolve_schema(["Amount spent (EUR)", "Impressions", "Link clicks"])

        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "Link clicks")
        self.assertEqual(resolution.column_for(SemanticField.LINK_CLICKS), "Link clicks")

    def test_snake_case_link_clicks_fill_in_for_missing_clicks(self) -> None:
        resolution = self.resolver.resolve_schema(["spend", "link_clicks"])

        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "link_clicks")

    def test_plain_clicks_beat_link_clicks(self) -> None:
        resolution = self.resolver.resolve_schema(["Link clicks", "Clicks"])

        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "Clicks")
        self.assertEqual(resolution.column_for(SemanticField.LINK_CLICKS), "Link clicks")

    def test_cost_with_currency_suffix_is_spend(self) -> None:
        resolution = self.resolver.resolve_schema(["Cost (USD)", "Impressions"])

        self.assertEqual(resolution.column_for(SemanticField.SPEND), "Cost (USD)")

    def test_matching_is_case_insensitive(self) -> None:
        resolution = self.resolver.resolve_schema(["SPEND", "IMPRESSIONS", "CLICKS"])

        self.assertEqual(resolution.column_for(SemanticField.SPEND), "SPEND")
        self.assertEqual(resolution.column_for(SemanticField.IMPRESSIONS), "IMPRESSIONS")
        self.assertEqual(resolution.column_for(SemanticField.CLICKS), "CLICKS")

    def test_missing_fields_are_reported_as_unresolved(self) -> None:
        resolution = self.resolver.resolve_schema(["Cost", "Impressions"])

        self.assertIsNone(resolution.column_for(SemanticField.REVENUE))
        self.assertFalse(resolution.has(SemanticField.DATE))
        self.assertIn(SemanticField.REVENUE, resolution.unresolved)
        self.assertFalse(resolution.has_conversion_signal())

    def test_resolution_is_memoized_per_schema(self) -> None:
        first = self.resolver.resolve_schema(["Spend", "Clicks"])
        second = self.resolver.resolve_schema(("Spend", "Clicks"))
        other = self.resolver.resolve_schema(["Clicks", "Spend"])

        self.assertIs(first, second)
        self.assertIsNot(first, other)

    def test_entity_column_prefers_most_granular_level(self) -> None:
        resolution = self.resolver.resolve_schema(["Campaign name", "Ad set name", "Ad name"])

        self.assertEqual(resolution.entity_column, "Ad name")
        self.assertEqual(resolution.entity_level, EntityLevel.ADS)

    def test_entity_column_falls_back_to_campaign(self) -> None:
        resolution = self.resolver.resolve_schema(["Campaign name", "Spend"])

        self.assertEqual(resolution.entity_column, "Campaign name")
        self.assertEqual(resolution.entity_level, EntityLevel.CAMPAIGNS)

    def test_custom_patterns_override_defaults(self) -> None:
        resolver = ColumnResolver(field_patterns={SemanticField.SPEND: [re.compile(r"^budget used$", re.I)]})

        resolution = resolver.resolve_schema(["Budget Used", "Spend"])

        self.assertEqual(resolution.column_for(SemanticField.SPEND), "Budget Used")
        self.assertIsNone(resolution.column_for(SemanticField.IMPRESSIONS))


if __name__ == "__main__":
    unittest.main()
