"""Unit tests for campaign reconciliation.

WHAT:
    One campaign per name, chosen by the most recent period, with metrics and
    ratios resolved through the source's column aliases.
"""

from adlens.analyzer.campaign_engine import (
    UNKNOWN_CAMPAIGN,
    build_campaign,
    latest_rows,
    reconcile_campaigns,
)
from adlens.core.field_registry import Source
from adlens.models.view_models import Platform


class TestLatestRows:
    def test_later_end_date_wins(self):
        rows = [
            {"id": 1, "Campanha": "Leads", "Data_inicio": "2024-01-01", "Data_final": "2024-01-07", "Cliques": "10"},
            {"id": 2, "Campanha": "Leads", "Data_inicio": "2024-01-08", "Data_final": "2024-01-14", "Cliques": "20"},
        ]
        campaigns = reconcile_campaigns(rows, Source.META)

        assert len(campaigns) == 1
        assert campaigns[0].id == "meta-2"
        assert campaigns[0].metrics.clicks == 20

    def test_input_order_does_not_matter(self):
        older = {"id": 1, "Campanha": "X", "Data_final": "2024-01-07", "Cliques": "1"}
        newer = {"id": 2, "Campanha": "X", "Data_final": "2024-02-07", "Cliques": "2"}

        forward = reconcile_campaigns([older, newer], Source.META)
        backward = reconcile_campaigns([newer, older], Source.META)

        assert forward[0].id == backward[0].id == "meta-2"

    def test_ties_keep_first_seen(self):
        rows = [
            {"id": "a", "campanha": "Brand", "data": "2024-03-01"},
            {"id": "b", "campanha": "Brand", "data": "2024-03-01"},
        ]
        assert latest_rows(rows, Source.GOOGLE)["Brand"]["id"] == "a"

    def test_end_date_falls_back_to_start_date(self):
        rows = [
            {"id": 1, "Campanha": "X", "Data_inicio": "2024-05-01"},
            {"id": 2, "Campanha": "X", "Data_inicio": "2024-04-01", "Data_final": "2024-04-30"},
        ]
        assert latest_rows(rows, Source.META)["X"]["id"] == 1

    def test_empty_end_date_falls_back_to_start_date(self):
        rows = [
            {"id": 1, "Campanha": "X", "Data_final": "", "Data_inicio": "2024-05-01"},
            {"id": 2, "Campanha": "X", "Data_inicio": "2024-04-01", "Data_final": "2024-04-30"},
        ]
        assert latest_rows(rows, Source.META)["X"]["id"] == 1

    def test_dated_row_replaces_undated_row(self):
        rows = [
            {"id": 1, "Campanha": "X"},
            {"id": 2, "Campanha": "X", "Data_inicio": "2024-05-01"},
        ]
        assert latest_rows(rows, Source.META)["X"]["id"] == 2

    def test_unparseable_date_never_replaces(self):
        rows = [
            {"id": 1, "Campanha": "X", "Data_inicio": "2024-05-01"},
            {"id": 2, "Campanha": "X", "Data_inicio": "semana 30"},
        ]
        assert latest_rows(rows, Source.META)["X"]["id"] == 1

    def test_distinct_names_are_kept_in_first_seen_order(self):
        rows = [
            {"id": 1, "campanha": "B"},
            {"id": 2, "campanha": "A"},
            {"id": 3, "campanha": "B"},
        ]
        names = [c.name for c in reconcile_campaigns(rows, Source.GOOGLE)]
        assert names == ["B", "A"]


class TestBuildCampaign:
    def test_google_row_mapping(self):
        row = {
            "id": 7,
            "campanha": "Search - Brand",
            "data": "2024-03-01T00:00:00",
            "impressoes": "1000",
            "cliques": "40",
            "custo": "100",
            "conversoes": "4",
        }
        campaign = build_campaign(row, Source.GOOGLE)

        assert campaign.id == "google-7"
        assert campaign.platform == Platform.GOOGLE_ADS
        assert campaign.status == "active"
        assert campaign.start_date == "2024-03-01"
        assert campaign.end_date == "2024-03-01"
        assert campaign.metrics.impressions == 1000
        assert campaign.metrics.spend == 100
        assert campaign.metrics.leads == 4  # conversions stand in for leads
        assert campaign.metrics.conversions == 4
        assert campaign.cost_per_click == 2.5
        assert campaign.cpa == 25.0

    def test_meta_row_mapping(self):
        row = {
            "id": 3,
            "Campanha": "Leads BR",
            "Data_inicio": "01/03/2024",
            "Data_final": "2024-03-07",
            "Impressoes": "500",
            "Cliques": "25",
            "Valor investido": "75.5",
            "leads": "5",
        }
        campaign = build_campaign(row, Source.META)

        assert campaign.id == "meta-3"
        assert campaign.platform == Platform.FACEBOOK_ADS
        assert campaign.start_date == "2024-03-01"
        assert campaign.end_date == "2024-03-07"
        assert campaign.metrics.spend == 75.5
        assert campaign.metrics.conversions == 5
        assert campaign.cost_per_click == 3.02
        assert campaign.cpa == 15.1

    def test_defaults_for_sparse_row(self):
        campaign = build_campaign({}, Source.GOOGLE)

        assert campaign.name == UNKNOWN_CAMPAIGN
        assert campaign.id == "google-Unknown-Campaign"
        assert campaign.start_date is None
        assert campaign.metrics.clicks == 0
        assert campaign.cost_per_click == 0
        assert campaign.cpa == 0

    def test_status_from_row(self):
        campaign = build_campaign({"campanha": "X", "status": "paused"}, Source.GOOGLE)
        assert campaign.status == "paused"

    def test_negative_values_pass_through(self):
        campaign = build_campaign({"Campanha": "X", "Valor investido": "-10"}, Source.META)
        assert campaign.metrics.spend == -10

    def test_serializes_camel_case(self):
        campaign = build_campaign({"id": 1, "Campanha": "X", "Data_inicio": "2024-01-01"}, Source.META)
        payload = campaign.model_dump(mode="json", by_alias=True)

        assert payload["costPerClick"] == 0
        assert payload["startDate"] == "2024-01-01"
        assert payload["platform"] == "Facebook Ads"
