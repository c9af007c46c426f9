"""Schema-constrained extraction: page content + instruction -> validated record."""

import json
import logging
from typing import Type, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from .errors import ExtractionShapeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SYSTEM_PROMPT = (
    "You extract structured data from the content of a web page.\n"
    "Follow the instruction exactly and answer with ONE JSON object that validates "
    "against the JSON schema you are given. Use the schema's property names verbatim. "
    "Do not invent values; when the instruction names a fallback for missing values, use it."
)

# Keeps prompts inside the model's context window.
MAX_CONTENT_CHARS = 120_000


class Extractor:
    """Runs one structured-extraction call against an OpenAI-compatible model."""

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    async def extract(self, instruction: str, content: str, schema: Type[T]) -> T:
        if len(content) > MAX_CONTENT_CHARS:
            logger.warning(
                "Page content for %s truncated from %d to %d characters",
                schema.__name__, len(content), MAX_CONTENT_CHARS,
            )
        schema_json = json.dumps(schema.model_json_schema(by_alias=True), ensure_ascii=False)
        user_prompt = (
            f"Instruction:\n{instruction.strip()}\n\n"
            f"JSON schema:\n{schema_json}\n\n"
            f"Page content:\n{content[:MAX_CONTENT_CHARS]}"
        )
        response = await self.client.chat.completions.create(
            model=self.model,
            temperature=0,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
        )
        output_str = response.choices[0].message.content or ""
        try:
            return schema.model_validate_json(output_str)
        except ValidationError as e:
            logger.debug("Rejected extraction output for %s: %r", schema.__name__, output_str)
            raise ExtractionShapeError(schema.__name__, str(e)) from e
