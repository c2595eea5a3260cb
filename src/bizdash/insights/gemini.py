"""Google Gemini client for insight generation.

Uses the google-genai SDK (v1.0+) async interface for plain text, JSON
responses constrained by a schema, and Google Search grounded answers.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from google import genai
from google.genai import types

from bizdash.config import get_settings
from bizdash.errors import ProviderError
from bizdash.insights.types import Citation

logger = structlog.get_logger(__name__)


@dataclass
class GeminiResponse:
    """Response from Gemini API."""

    content: str
    stop_reason: str
    usage: dict[str, int]
    citations: list[Citation] = field(default_factory=list)


class GeminiClient:
    """Thin async wrapper around the Gemini text models."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        settings = get_settings()
        if api_key is None and settings.google_api_key is not None:
            api_key = settings.google_api_key.get_secret_value()
        if not api_key:
            raise ProviderError("GOOGLE_API_KEY is not configured")

        self._api_key = api_key
        self._model_name = model or settings.gemini_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature

        self._client = genai.Client(api_key=self._api_key)

        self._logger = logger.bind(client="gemini", model=self._model_name)

    def _convert_json_schema_to_gemini(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Convert JSON Schema to Gemini's schema format.

        Gemini uses a subset of OpenAPI schema format.
        """
        gemini_schema: dict[str, Any] = {}

        if "type" in schema:
            type_map = {
                "string": "STRING",
                "integer": "INTEGER",
                "number": "NUMBER",
                "boolean": "BOOLEAN",
                "array": "ARRAY",
                "object": "OBJECT",
            }
            gemini_schema["type"] = type_map.get(schema["type"], "STRING")

        if "description" in schema:
            gemini_schema["description"] = schema["description"]

        if "enum" in schema:
            gemini_schema["enum"] = schema["enum"]

        if "properties" in schema:
            gemini_schema["properties"] = {
                k: self._convert_json_schema_to_gemini(v)
                for k, v in schema["properties"].items()
            }

        if "required" in schema:
            gemini_schema["required"] = schema["required"]

        if "items" in schema:
            gemini_schema["items"] = self._convert_json_schema_to_gemini(schema["items"])

        return gemini_schema

    def _build_config(
        self,
        response_schema: dict[str, Any] | None = None,
        use_search: bool = False,
    ) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            max_output_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        if response_schema is not None:
            config.response_mime_type = "application/json"
            config.response_schema = types.Schema.model_validate(
                self._convert_json_schema_to_gemini(response_schema)
            )
        if use_search:
            config.tools = [types.Tool(google_search=types.GoogleSearch())]
        return config

    def _parse_citations(self, candidate: Any) -> list[Citation]:
        metadata = getattr(candidate, "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []
        citations = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", None)
            if uri:
                citations.append(Citation(uri=uri, title=getattr(web, "title", None) or ""))
        return citations

    def _parse_response(self, response: Any) -> GeminiResponse:
        """Parse Gemini response into our format."""
        content_parts: list[str] = []
        citations: list[Citation] = []
        stop_reason = "end_turn"

        if response.candidates:
            candidate = response.candidates[0]
            parts = candidate.content.parts if candidate.content else None

            for part in parts or []:
                if getattr(part, "text", None):
                    content_parts.append(part.text)

            finish_reason = candidate.finish_reason
            # SDK enums expose .name, tests and older versions pass strings
            reason = getattr(finish_reason, "name", None) or str(finish_reason)
            stop_reason_map = {
                "STOP": "end_turn",
                "MAX_TOKENS": "max_tokens",
                "SAFETY": "content_filter",
                "RECITATION": "content_filter",
            }
            stop_reason = stop_reason_map.get(reason, "end_turn")
            citations = self._parse_citations(candidate)

        usage = {"input_tokens": 0, "output_tokens": 0}
        if getattr(response, "usage_metadata", None):
            usage["input_tokens"] = (
                getattr(response.usage_metadata, "prompt_token_count", 0) or 0
            )
            usage["output_tokens"] = (
                getattr(response.usage_metadata, "candidates_token_count", 0) or 0
            )

        return GeminiResponse(
            content="".join(content_parts),
            stop_reason=stop_reason,
            usage=usage,
            citations=citations,
        )

    async def generate(
        self,
        prompt: str,
        response_schema: dict[str, Any] | None = None,
        use_search: bool = False,
    ) -> GeminiResponse:
        """Generate a response from Gemini.

        Args:
            prompt: The full user prompt.
            response_schema: Optional JSON Schema; when given the model is asked
                for JSON conforming to it.
            use_search: Ground the answer with Google Search.

        Returns:
            GeminiResponse with content, citations and usage info.
        """
        self._logger.debug(
            "generating_response",
            prompt_chars=len(prompt),
            structured=response_schema is not None,
            use_search=use_search,
        )

        config = self._build_config(response_schema, use_search)

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            self._logger.error("api_error", error=str(e))
            raise

        parsed = self._parse_response(response)

        self._logger.info(
            "response_generated",
            stop_reason=parsed.stop_reason,
            citations=len(parsed.citations),
            input_tokens=parsed.usage["input_tokens"],
            output_tokens=parsed.usage["output_tokens"],
        )
        return parsed

    async def generate_json(self, prompt: str, schema: dict[str, Any]) -> GeminiResponse:
        """Generate a JSON response constrained by ``schema``."""
        return await self.generate(prompt, response_schema=schema)
