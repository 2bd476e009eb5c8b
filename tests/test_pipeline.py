"""Unit tests for the view orchestrator.

WHAT:
    View routing, consolidated merging, per-source failure isolation and the
    generation guard on superseded loads.

WHY:
    The dashboard must always get a result shape back; one broken source may
    never hide the other.
"""

import asyncio

from adlens.analyzer.pipeline import View, ViewSession, load_dates, load_insights, load_view
from adlens.connectors.supabase.endpoints import SourceFetcher
from adlens.core.messages import Message, get_message
from adlens.models.view_models import CONSOLIDATED, Platform

from conftest import GOOGLE_HOST, META_HOST, make_settings

GOOGLE_TABLE = "Gallant_dadosDiarios"
META_TABLE = "facebook-ads"

GOOGLE_ROWS = [{"campanha": "A", "custo": "100", "cliques": "10", "data": "2024-03-01"}]
META_ROWS = [{"Campanha": "B", "Valor investido": "50", "Cliques": "5", "Data_inicio": "2024-03-01"}]


def _run(coro):
    return asyncio.run(coro)


async def _with_fetcher(fetcher, coro_factory):
    try:
        return await coro_factory(fetcher)
    finally:
        await fetcher.close()


class TestLoadView:
    def test_principal_end_to_end(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, GOOGLE_ROWS)
        fake_store.add_table(META_HOST, META_TABLE, META_ROWS)

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.PRINCIPAL, settings, fetcher=f))
        )

        assert result.error is None
        assert [(c.name, c.platform) for c in result.campaigns] == [
            ("A", Platform.GOOGLE_ADS),
            ("B", Platform.FACEBOOK_ADS),
        ]
        assert len(result.daily) == 1
        point = result.daily[0]
        assert point.date == "2024-03-01"
        assert point.clicks == 15
        assert point.spend == 150
        assert point.source == CONSOLIDATED

    def test_same_name_across_platforms_stays_distinct(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, [{"id": 1, "campanha": "Brand"}])
        fake_store.add_table(META_HOST, META_TABLE, [{"id": 1, "Campanha": "Brand"}])

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.PRINCIPAL, settings, fetcher=f))
        )

        assert [c.id for c in result.campaigns] == ["google-1", "meta-1"]

    def test_single_source_view(self, settings, fetcher, fake_store):
        fake_store.add_table(META_HOST, META_TABLE, META_ROWS)

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.META, settings, fetcher=f))
        )

        assert [c.name for c in result.campaigns] == ["B"]
        assert result.daily[0].source is None
        assert result.error is None
        assert all(r.url.host == META_HOST for r in fake_store.requests)

    def test_single_source_without_campaigns_informs(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, [])

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.GOOGLE, settings, fetcher=f))
        )

        assert result.campaigns == []
        assert result.error == get_message(Message.NO_CAMPAIGNS_GOOGLE)

    def test_single_source_failure_is_reported(self, settings, fetcher, fake_store):
        fake_store.fail(META_HOST, META_TABLE)

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.META, settings, fetcher=f))
        )

        assert result.campaigns == []
        assert result.daily == []
        assert result.error == get_message(Message.FETCH_FAILED_META)

    def test_principal_keeps_healthy_source_when_other_fails(
        self, settings, fetcher, fake_store
    ):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, GOOGLE_ROWS)
        fake_store.fail(META_HOST, META_TABLE, status=503)

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.PRINCIPAL, settings, fetcher=f))
        )

        assert [c.name for c in result.campaigns] == ["A"]
        assert result.daily[0].clicks == 10
        assert result.daily[0].source == CONSOLIDATED
        assert result.error == get_message(Message.CONSOLIDATED_FAILED)

    def test_tiktok_makes_no_network_call(self, settings, fetcher, fake_store):
        result = _run(load_view(View.TIKTOK, settings, fetcher=fetcher))

        assert result.campaigns == []
        assert result.daily == []
        assert result.error
        assert fake_store.requests == []

    def test_other_platform_message(self, settings):
        result = _run(load_view("other", settings))
        assert result.error == get_message(Message.PLATFORM_NOT_INTEGRATED)

    def test_messages_follow_language(self):
        english = make_settings(dashboard_language="en")
        result = _run(load_view(View.TIKTOK, english))
        assert result.error.startswith("TikTok Ads is not integrated")

    def test_result_is_json_serializable(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, GOOGLE_ROWS)
        fake_store.add_table(META_HOST, META_TABLE, META_ROWS)

        result = _run(
            _with_fetcher(fetcher, lambda f: load_view(View.PRINCIPAL, settings, fetcher=f))
        )
        payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert payload["daily"][0]["_source"] == CONSOLIDATED
        assert payload["campaigns"][0]["costPerClick"] == 10.0
        assert "error" not in payload


class TestLoadDates:
    def test_principal_unions_sources(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, [{"data": "2024-03-02"}, {"data": "2024-03-01"}])
        fake_store.add_table(META_HOST, META_TABLE, [{"Data_inicio": "2024-03-03"}, {"Data_inicio": "2024-03-01"}])

        dates = _run(
            _with_fetcher(fetcher, lambda f: load_dates(View.PRINCIPAL, settings, fetcher=f))
        )
        assert dates == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_failing_source_adds_nothing(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, GOOGLE_TABLE, [{"data": "2024-03-02"}])
        fake_store.fail(META_HOST, META_TABLE)

        dates = _run(
            _with_fetcher(fetcher, lambda f: load_dates(View.PRINCIPAL, settings, fetcher=f))
        )
        assert dates == ["2024-03-02"]

    def test_unintegrated_view_has_no_dates(self, settings):
        assert _run(load_dates(View.TIKTOK, settings)) == []


class TestLoadInsights:
    def test_principal_concatenates_google_then_meta(self, settings, fetcher, fake_store):
        fake_store.add_table(GOOGLE_HOST, "Gallant_insights", [{"output": "g1"}])
        fake_store.add_table(META_HOST, "meta_insights", [{"content": "m1"}])

        result = _run(
            _with_fetcher(fetcher, lambda f: load_insights(View.PRINCIPAL, settings, fetcher=f))
        )
        assert [i.content for i in result.insights] == ["g1", "m1"]
        assert result.error is None

    def test_failure_sets_message(self, settings, fetcher, fake_store):
        fake_store.fail(GOOGLE_HOST, "Gallant_insights")

        result = _run(
            _with_fetcher(fetcher, lambda f: load_insights(View.GOOGLE, settings, fetcher=f))
        )
        assert result.insights == []
        assert result.error == get_message(Message.INSIGHTS_FAILED)


class SlowFetcher(SourceFetcher):
    """Fetcher whose Google fetch waits on an event."""

    def __init__(self, config, release: asyncio.Event, rows):
        super().__init__(config)
        self.release = release
        self.rows = rows

    async def fetch_raw_rows(self, source):
        await self.release.wait()
        return self.rows


class TestViewSession:
    def test_commits_latest_load(self, settings):
        session = ViewSession(settings)
        result, committed = _run(session.load(View.TIKTOK))

        assert committed is True
        assert session.current is result
        assert session.current_view == View.TIKTOK

    def test_superseded_load_is_not_committed(self, settings):
        """WHAT: A slow load finishing after a newer one must not overwrite it.
        WHY: Only the most recent view selection may be displayed.
        """
        session = ViewSession(settings)

        async def scenario():
            release = asyncio.Event()
            slow = SlowFetcher(settings, release, [{"campanha": "Old"}])
            slow_task = asyncio.create_task(session.load(View.GOOGLE, fetcher=slow))
            await asyncio.sleep(0)

            fast_result, fast_committed = await session.load(View.TIKTOK)
            release.set()
            slow_result, slow_committed = await slow_task
            return fast_result, fast_committed, slow_result, slow_committed

        fast_result, fast_committed, slow_result, slow_committed = _run(scenario())

        assert fast_committed is True
        assert slow_committed is False
        assert [c.name for c in slow_result.campaigns] == ["Old"]
        assert session.current is fast_result
        assert session.current_view == View.TIKTOK
