"""ADLENS — Anthropic Claude Provider."""

import json
from typing import Optional

from anthropic import AsyncAnthropic

from adlens.ai.base_provider import AIProvider
from adlens.config import Settings
from adlens.core.logging import get_logger

logger = get_logger("ai.claude")

SYSTEM_PROMPT = """You are a paid-media analyst reading a marketing dashboard.

The data holds Google Ads and Meta Ads campaigns (spend, clicks, impressions,
leads, cost per click, CPA) and a daily series of the same metrics. Values are
pre-computed.

RULES:

1. Never recompute, round or modify numeric values. Quote them as given.
2. Do not introduce numbers that are not present in the data.
3. If the data carries an "error" field, mention it and limit the analysis to
   what is present.
4. If data is insufficient for the question, say so explicitly.

FORMAT:
- Lead with the most important finding
- Use bullet points
- Keep it under 300 words
- Answer in the language requested by the user (default: {language})
"""


class ClaudeProvider(AIProvider):
    """Anthropic Claude provider for narrative generation."""

    def __init__(self, config: Settings):
        self.config = config
        self.client = (
            AsyncAnthropic(api_key=config.anthropic_api_key)
            if config.anthropic_api_key
            else None
        )

    def is_available(self) -> bool:
        return self.client is not None

    async def generate_summary(
        self, view_json: dict, question: Optional[str] = None
    ) -> str:
        if not self.is_available():
            raise RuntimeError("Claude provider not configured")

        data_block = json.dumps(view_json, indent=2, ensure_ascii=False)

        if question:
            user_prompt = (
                f'The user asks: "{question}"\n\n'
                f"Answer using ONLY the dashboard data below.\n\n"
                f"Data:\n{data_block}"
            )
        else:
            user_prompt = f"Summarize the performance shown in this dashboard view:\n\n{data_block}"

        try:
            response = await self.client.messages.create(
                model=self.config.ai_model,
                max_tokens=1000,
                system=SYSTEM_PROMPT.format(language=self.config.dashboard_language),
                messages=[
                    {"role": "user", "content": user_prompt},
                ],
            )
            return (
                response.content[0].text
                if response.content
                else "No summary generated."
            )
        except Exception as e:
            logger.error(f"Claude generation failed: {e}")
            raise
