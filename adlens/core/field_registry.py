"""ADLENS — Canonical Field Registry.

Maps every canonical field to the ordered raw column names each source has
been seen using. Source-language (Portuguese) names come first, English ones
after. When a table grows a new column alias, register it here so every
engine resolves it the same way.
"""

from enum import Enum
from typing import Dict, Tuple


class Source(str, Enum):
    """An integrated advertising data source."""

    GOOGLE = "google"
    META = "meta"


class CanonicalField(str, Enum):
    """Normalized field names used internally."""

    RAW_ID = "raw_id"
    NAME = "name"
    STATUS = "status"
    DATE = "date"  # Grouping key for daily aggregation
    START_DATE = "start_date"
    END_DATE = "end_date"
    # Metrics
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    SPEND = "spend"
    LEADS = "leads"
    CONVERSIONS = "conversions"


METRIC_FIELDS: Tuple[CanonicalField, ...] = (
    CanonicalField.IMPRESSIONS,
    CanonicalField.CLICKS,
    CanonicalField.SPEND,
    CanonicalField.LEADS,
    CanonicalField.CONVERSIONS,
)

FieldTable = Dict[CanonicalField, Tuple[str, ...]]


# ─────────────────────────────────────────────
# GOOGLE ADS — Gallant_dadosDiarios
# ─────────────────────────────────────────────

GOOGLE_FIELDS: FieldTable = {
    CanonicalField.RAW_ID: ("id",),
    CanonicalField.NAME: (
        "campanha",
        "Campanha",
        "campaign",
        "Campaign",
        "campaign_name",
        "name",
    ),
    CanonicalField.STATUS: ("status", "Status"),
    CanonicalField.DATE: ("data", "Data", "date", "Date"),
    CanonicalField.START_DATE: ("data", "data_inicio", "Data_inicio", "date"),
    CanonicalField.END_DATE: ("data", "data_final", "Data_final"),
    CanonicalField.IMPRESSIONS: (
        "impressoes",
        "Impressoes",
        "impressions",
        "Impressions",
    ),
    CanonicalField.CLICKS: ("cliques", "Cliques", "clicks", "Clicks"),
    CanonicalField.SPEND: (
        "custo",
        "Custo",
        "gasto",
        "Gasto",
        "valor_investido",
        "Valor_investido",
        "spend",
        "cost",
        "Cost",
        "valor",
    ),
    CanonicalField.LEADS: ("leads", "Leads", "conversoes", "Conversoes"),
    CanonicalField.CONVERSIONS: (
        "conversoes",
        "Conversoes",
        "conversions",
        "Conversions",
    ),
}


# ─────────────────────────────────────────────
# META ADS — facebook-ads
# ─────────────────────────────────────────────

META_FIELDS: FieldTable = {
    CanonicalField.RAW_ID: ("id",),
    CanonicalField.NAME: (
        "Campanha",
        "campanha",
        "Nome_da_Campanha",
        "nome_da_campanha",
        "campaign_name",
        "name",
    ),
    CanonicalField.STATUS: ("status", "Status"),
    CanonicalField.DATE: ("Data_inicio", "data_inicio", "date", "Date"),
    CanonicalField.START_DATE: ("Data_inicio", "data_inicio", "date"),
    CanonicalField.END_DATE: ("Data_final", "data_final"),
    CanonicalField.IMPRESSIONS: ("Impressoes", "impressoes", "impressions"),
    CanonicalField.CLICKS: ("Cliques", "cliques", "clicks"),
    CanonicalField.SPEND: (
        "Valor investido",
        "valor_investido",
        "Gasto",
        "gasto",
        "investimento",
        "spend",
    ),
    CanonicalField.LEADS: ("leads", "Leads"),
    # The Meta table only tracks leads; they double as conversions
    CanonicalField.CONVERSIONS: (
        "Conversoes",
        "conversoes",
        "conversions",
        "leads",
        "Leads",
    ),
}


# ─────────────────────────────────────────────
# INSIGHTS — pre-computed AI text tables
# ─────────────────────────────────────────────

INSIGHT_CONTENT_KEYS: Tuple[str, ...] = ("output", "conteudo", "insight", "content")
INSIGHT_CREATED_KEYS: Tuple[str, ...] = ("created_at", "data_criacao", "date")
INSIGHT_CAMPAIGN_KEYS: Tuple[str, ...] = (
    "campanha",
    "Campanha",
    "campaign",
    "Campaign",
)


# ─────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────

SOURCE_FIELDS: Dict[Source, FieldTable] = {
    Source.GOOGLE: GOOGLE_FIELDS,
    Source.META: META_FIELDS,
}


def candidates(source: Source, field: CanonicalField) -> Tuple[str, ...]:
    """Ordered raw column names for a canonical field of a source."""
    return SOURCE_FIELDS[source].get(field, ())


def recency_keys(source: Source) -> Tuple[str, ...]:
    """Columns compared to decide which duplicate campaign row is newest.

    End-date columns win over start-date ones.
    """
    return candidates(source, CanonicalField.END_DATE) + candidates(
        source, CanonicalField.START_DATE
    )
