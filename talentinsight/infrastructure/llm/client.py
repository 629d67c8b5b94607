"""
Gemini REST client for multimodal structured-output requests.

Talks either to the Gemini API (API key) or to Vertex AI (OAuth token from
google-auth), using the same generateContent body for both.
"""
import logging
from typing import Optional, Dict, Any, List

import requests
import google.auth
import google.auth.transport.requests
from google.oauth2 import service_account

from ...config import GEMINI_API_BASE, VERTEX_LOCATION, MODEL_NAME, LLM_TIMEOUT
from ...errors import TransportError

logger = logging.getLogger("llm_client")

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


def text_part(text: str) -> Dict[str, Any]:
    """Build a text content part."""
    return {"text": text}


def inline_data_part(mime_type: str, base64_data: str) -> Dict[str, Any]:
    """Build an inline binary attachment part from base64 text."""
    return {"inlineData": {"mimeType": mime_type, "data": base64_data}}


class GeminiRestClient:
    """REST-based client for Gemini models."""

    def __init__(self,
                 api_key: Optional[str] = None,
                 project: Optional[str] = None,
                 location: str = VERTEX_LOCATION,
                 model: str = MODEL_NAME,
                 credentials_json: Optional[str] = None,
                 timeout: int = LLM_TIMEOUT):
        if not api_key and not project:
            raise ValueError("Either api_key or project is required")
        self.api_key = api_key
        self.project = project
        self.location = location
        self.model = model
        self.credentials_json = credentials_json
        self.timeout = timeout
        self._credentials = None

        if api_key:
            self.endpoint = f"{GEMINI_API_BASE}/models/{self.model}:generateContent"
        else:
            base_url = f"https://{self.location}-aiplatform.googleapis.com/v1"
            model_resource = f"projects/{self.project}/locations/{self.location}/publishers/google/models/{self.model}"
            self.endpoint = f"{base_url}/{model_resource}:generateContent"

    @classmethod
    def from_config(cls, config) -> "GeminiRestClient":
        return cls(
            api_key=config.api_key,
            project=config.google_cloud_project,
            location=config.vertex_location,
            model=config.model_name,
            credentials_json=config.google_application_credentials,
            timeout=config.llm_timeout,
        )

    def _load_credentials(self):
        if self.credentials_json:
            return service_account.Credentials.from_service_account_file(
                self.credentials_json,
                scopes=[CLOUD_PLATFORM_SCOPE],
            )
        creds, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
        return creds

    def _access_token(self) -> str:
        """Return a valid OAuth token for Vertex API calls, refreshing it once expired."""
        if self._credentials is None:
            self._credentials = self._load_credentials()
        if not self._credentials.valid:
            logger.info("Refreshing Vertex access token")
            self._credentials.refresh(google.auth.transport.requests.Request())
        return self._credentials.token

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key
        else:
            headers["Authorization"] = f"Bearer {self._access_token()}"
        return headers

    def build_body(
        self,
        parts: List[Dict[str, Any]],
        response_schema: Optional[Dict[str, Any]] = None,
        temperature: Optional[float] = None,
        thinking_budget: Optional[int] = None,
        max_output_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Assemble the generateContent request body."""
        generation_config: Dict[str, Any] = {}
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        if temperature is not None:
            generation_config["temperature"] = float(temperature)
        if thinking_budget is not None:
            generation_config["thinkingConfig"] = {"thinkingBudget": int(thinking_budget)}
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = int(max_output_tokens)

        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": list(parts)}]}
        if generation_config:
            body["generationConfig"] = generation_config
        return body

    def generate_content(
        self,
        parts: List[Dict[str, Any]],
        response_schema: Optional[Dict[str, Any]] = None,
        temperature: Optional[float] = None,
        thinking_budget: Optional[int] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """
        Send one generateContent request and return the response text.

        Args:
            parts: Content parts (text and inline attachments)
            response_schema: Declared output schema; forces a JSON response when set
            temperature: Sampling temperature
            thinking_budget: Token budget for model thinking
            max_output_tokens: Output token cap

        Returns:
            Concatenated response text, or an empty string when the model returned none

        Raises:
            TransportError: On network failure or an HTTP error status
        """
        body = self.build_body(parts, response_schema, temperature, thinking_budget, max_output_tokens)
        attachments = sum(1 for p in parts if "inlineData" in p)
        logger.debug("Sending generateContent to %s (%d parts, %d attachments)", self.model, len(parts), attachments)

        try:
            resp = requests.post(self.endpoint, headers=self._headers(), json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("LLM request failed: %s", e)
            raise TransportError(f"Gagal menghubungi layanan AI: {e}") from e

        if resp.status_code >= 400:
            logger.error("Gemini REST error %s: %s", resp.status_code, resp.text[:500])
            raise TransportError(
                f"Layanan AI mengembalikan kesalahan {resp.status_code}: {resp.text[:300]}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise TransportError(f"Respons layanan AI tidak dapat dibaca: {e}") from e

        text = self._parse_response_text(payload)
        logger.debug("Raw LLM output: %s", repr(text[:2000]))
        return text

    def _parse_response_text(self, resp_json: Dict[str, Any]) -> str:
        """
        Extract the answer text from a generateContent response.
        Thought parts are skipped; an empty string means no answer was produced.
        """
        feedback = resp_json.get("promptFeedback") or {}
        if feedback.get("blockReason"):
            logger.warning("Prompt blocked: %s", feedback["blockReason"])

        cands = resp_json.get("candidates") or []
        if not cands:
            return ""

        first = cands[0]
        if first.get("finishReason") not in (None, "STOP"):
            logger.warning("Candidate finished with reason %s", first.get("finishReason"))

        content = first.get("content") or {}
        texts = [
            p["text"] for p in content.get("parts") or []
            if isinstance(p, dict) and isinstance(p.get("text"), str) and not p.get("thought")
        ]
        return "".join(texts)
