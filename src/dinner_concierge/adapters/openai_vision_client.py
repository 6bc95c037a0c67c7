"""OpenAI Responses API client for menu extraction."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from dinner_concierge.services.menu_extraction import MenuVisionClient

SYSTEM_INSTRUCTION = (
    "You are a data extraction assistant specialized in digitizing restaurant "
    "menus. Be precise with prices and names."
)


@dataclass
class OpenAIVisionClient(MenuVisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object] | None:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": SYSTEM_INSTRUCTION,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_image", "image_url": image_data_url},
                        {"type": "input_text", "text": prompt},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "menu_extract",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            return None
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
