import logging
import re
import time
from dataclasses import dataclass
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from utils.errors import ModelServiceError

logger = logging.getLogger(__name__)

SYSTEM_ROLE = "You are a geospatial business analyst. Follow the requested output format exactly."

CODE_FENCE = re.compile(r"^```[\w-]*\s*\n?|\n?\s*```$")


def create_chat_model(settings):
    """Initialize LangChain's Gemini chat model from settings."""
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.gemini_api_key,
        temperature=settings.gemini_temperature,
    )


@dataclass(frozen=True)
class ModelReply:
    content: str
    time_taken: float
    input_tokens: int
    output_tokens: int


def clean_model_text(text: str) -> str:
    """Strip whitespace and a surrounding markdown code fence (```json ... ```)."""
    return CODE_FENCE.sub("", text.strip()).strip()


def _reply_text(response) -> str:
    content = response.content
    if isinstance(content, str):
        return content
    # Some providers return a list of content parts
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GenerativeModel:
    """Thin wrapper over a LangChain chat model that times and logs each call."""

    def __init__(self, chat_model, system_role: str = SYSTEM_ROLE):
        self.chat_model = chat_model
        self.system_role = system_role

    def generate(self, prompt: str, label: str = "prompt") -> ModelReply:
        start_time = time.time()
        messages = [
            SystemMessage(content=self.system_role),
            HumanMessage(content=prompt),
        ]
        try:
            response = self.chat_model.invoke(messages)
        except Exception as e:
            logger.error(f"Model call '{label}' failed: {type(e).__name__} - {e}")
            raise ModelServiceError(f"The AI model failed while generating {label}: {e}")

        content = _reply_text(response).strip()
        if not content:
            raise ModelServiceError(f"The AI model returned an empty reply for {label}")

        usage = getattr(response, "usage_metadata", None) or {}
        reply = ModelReply(
            content=content,
            time_taken=time.time() - start_time,
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
        )
        logger.info(
            f"Model call '{label}' finished in {reply.time_taken:.2f}s "
            f"(prompt tokens: {reply.input_tokens}, completion tokens: {reply.output_tokens})"
        )
        return reply
