"""ADLENS — User-facing Messages.

Error and info strings shown by the dashboard, per configured language.
"""

from enum import Enum
from typing import Dict


class Message(str, Enum):
    NO_CAMPAIGNS_GOOGLE = "no_campaigns_google"
    NO_CAMPAIGNS_META = "no_campaigns_meta"
    FETCH_FAILED_GOOGLE = "fetch_failed_google"
    FETCH_FAILED_META = "fetch_failed_meta"
    CONSOLIDATED_FAILED = "consolidated_failed"
    TIKTOK_NOT_INTEGRATED = "tiktok_not_integrated"
    PLATFORM_NOT_INTEGRATED = "platform_not_integrated"
    INSIGHTS_FAILED = "insights_failed"


MESSAGES: Dict[str, Dict[Message, str]] = {
    "pt-BR": {
        Message.NO_CAMPAIGNS_GOOGLE: "Nenhuma campanha encontrada no Google Ads.",
        Message.NO_CAMPAIGNS_META: "Nenhuma campanha encontrada no Meta Ads.",
        Message.FETCH_FAILED_GOOGLE: "Erro ao buscar dados do Google Ads do Supabase.",
        Message.FETCH_FAILED_META: "Erro ao buscar dados do Meta Ads do Supabase.",
        Message.CONSOLIDATED_FAILED: "Erro ao carregar dados consolidados das plataformas.",
        Message.TIKTOK_NOT_INTEGRATED: (
            "TikTok Ads não foi integrado. Aguardando implementação com API real."
        ),
        Message.PLATFORM_NOT_INTEGRATED: (
            "Plataforma não integrada. Apenas Google Ads e Meta Ads possuem dados reais no momento."
        ),
        Message.INSIGHTS_FAILED: "Não foi possível carregar os insights de IA neste momento.",
    },
    "en": {
        Message.NO_CAMPAIGNS_GOOGLE: "No campaigns found in Google Ads.",
        Message.NO_CAMPAIGNS_META: "No campaigns found in Meta Ads.",
        Message.FETCH_FAILED_GOOGLE: "Failed to fetch Google Ads data from Supabase.",
        Message.FETCH_FAILED_META: "Failed to fetch Meta Ads data from Supabase.",
        Message.CONSOLIDATED_FAILED: "Failed to load consolidated platform data.",
        Message.TIKTOK_NOT_INTEGRATED: (
            "TikTok Ads is not integrated yet. Waiting for a real API implementation."
        ),
        Message.PLATFORM_NOT_INTEGRATED: (
            "Platform not integrated. Only Google Ads and Meta Ads have real data for now."
        ),
        Message.INSIGHTS_FAILED: "AI insights could not be loaded right now.",
    },
}

DEFAULT_LANGUAGE = "pt-BR"


def get_message(key: Message, language: str = DEFAULT_LANGUAGE) -> str:
    """Look up a message, falling back to the default language."""
    table = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    return table[key]
