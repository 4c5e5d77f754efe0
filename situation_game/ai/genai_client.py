# situation_game/ai/genai_client.py
import json
import logging
import re
from typing import Any

from google import genai
from google.genai import types

from ..config import settings
from ..errors import GameError, UpstreamServiceError, MalformedResponseError

log = logging.getLogger("genai")


def build_client() -> genai.Client:
    """GEMINI_API_KEY 가 있으면 Gemini API, 없으면 Vertex 경유"""
    http_options = types.HttpOptions(timeout=settings.genai_timeout_seconds * 1000)
    if settings.gemini_api_key:
        return genai.Client(api_key=settings.gemini_api_key, http_options=http_options)
    if not settings.gcp_project_id:
        raise UpstreamServiceError("GCP_PROJECT_ID 또는 GEMINI_API_KEY 환경변수를 설정하세요.")
    return genai.Client(
        vertexai=True,
        project=settings.gcp_project_id,
        location=settings.gcp_location,
        http_options=http_options,
    )


def strip_code_fences(text: str) -> str:
    """```json ... ``` 또는 ``` ... ```로 감싼 응답에서 본문만 추출"""
    if not text:
        return text
    s = text.strip()
    if s.startswith("```"):
        s = re.sub(r"^```(?:json)?\s*", "", s, count=1, flags=re.IGNORECASE)
        s = re.sub(r"\s*```$", "", s, count=1)
    return s.strip()


def load_json(text: str) -> Any:
    """그대로 → 펜스 제거 → 바깥 괄호 범위만. 전부 실패하면 MalformedResponseError"""
    if not text or not text.strip():
        raise MalformedResponseError("빈 응답")
    try:
        return json.loads(text)
    except ValueError:
        pass

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except ValueError:
        pass

    starts = [i for i in (cleaned.find("["), cleaned.find("{")) if i != -1]
    if starts:
        start = min(starts)
        end = cleaned.rfind("]" if cleaned[start] == "[" else "}")
        if end > start:
            try:
                return json.loads(cleaned[start:end + 1])
            except ValueError:
                pass

    log.warning("[GENAI] JSON 파싱 실패: %r", cleaned[:200])
    raise MalformedResponseError("LLM JSON 파싱 실패")


class GenerationClient:
    """생성 서비스 호출 1회 단위. client 를 주입하면 그걸 쓴다 (테스트용)."""

    def __init__(self, client: Any = None, model_name: str | None = None):
        self._client = client
        self.model_name = model_name or settings.gemini_model

    @property
    def client(self):
        if self._client is None:
            self._client = build_client()
        return self._client

    def generate_text(
        self,
        system_instruction: str,
        prompt: str,
        *,
        temperature: float = 0.3,
        max_output_tokens: int = 2048,
    ) -> str:
        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction,
                    temperature=temperature,
                    max_output_tokens=max_output_tokens,
                    response_mime_type="application/json",
                ),
            )
        except GameError:
            raise
        except Exception as e:
            log.warning("[GENAI] 호출 실패: %s: %s", type(e).__name__, e)
            raise UpstreamServiceError(f"{type(e).__name__}: {e}") from e

        text = (getattr(resp, "text", "") or "").strip()
        if not text:
            # resp.text 가 비면 candidates[].content.parts[].text 에서 모은다
            chunks = []
            for cand in getattr(resp, "candidates", None) or []:
                content = getattr(cand, "content", None)
                for part in getattr(content, "parts", None) or []:
                    if getattr(part, "text", None):
                        chunks.append(part.text)
            text = "".join(chunks).strip()
        if not text:
            raise UpstreamServiceError("생성 서비스 응답이 비어 있음")
        log.debug("[GENAI] 응답 길이=%d", len(text))
        return text

    def generate_json(self, system_instruction: str, prompt: str, **kwargs) -> Any:
        return load_json(self.generate_text(system_instruction, prompt, **kwargs))


_default_generator: GenerationClient | None = None


def get_generation_client() -> GenerationClient:
    """FastAPI 의존성. 실제 클라이언트는 첫 호출 때 만든다."""
    global _default_generator
    if _default_generator is None:
        _default_generator = GenerationClient()
    return _default_generator
