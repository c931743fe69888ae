"""
LLM module for the AI collaborator calls.

Two providers are supported, chosen by ``config.LLM_PROVIDER``:
- ``openrouter``: any OpenAI-compatible endpoint through the openai SDK
- ``gemini``: the Gemini ``generateContent`` REST endpoint through requests

Both return the raw text of the reply. Shape validation of JSON replies is
left to the caller so that a malformed body is never partially applied.
"""

import openai
import requests

import config
from aieditor.errors import MalformedResponseError, TransportError
from aieditor.logger import get_logger
from aieditor.prompt import FILES_SCHEMA

logger = get_logger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{MODEL}:generateContent"

# Initialize OpenRouter client
openrouter_client = (
    openai.OpenAI(
        base_url=config.OPENROUTER_BASE_URL,
        api_key=config.OPENROUTER_API_KEY,
        timeout=config.LLM_TIMEOUT,
    )
    if config.OPENROUTER_API_KEY
    else None
)


def select_model(deep_reasoning: bool) -> tuple[str, int | None]:
    """Model identifier and reasoning token budget for the toggle state"""
    if deep_reasoning:
        return config.MODEL_REASONING, config.REASONING_BUDGET
    return config.MODEL_FAST, None


def strip_code_fence(text: str) -> str:
    """Remove a markdown code block wrapper around a JSON reply"""
    json_text = text.strip()
    if json_text.startswith("```json"):
        json_text = json_text[7:]  # Remove ```json
    if json_text.startswith("```"):
        json_text = json_text[3:]  # Remove ```
    if json_text.endswith("```"):
        json_text = json_text[:-3]  # Remove closing ```
    return json_text.strip()


def generate_json(content: str, system_instruction: str, deep_reasoning: bool = False) -> str:
    """Ask for a JSON reply constrained to the three-file schema"""
    model, budget = select_model(deep_reasoning)
    text = _forward(content, system_instruction, model, budget, json_schema=FILES_SCHEMA)
    if not text or not text.strip():
        raise MalformedResponseError("Empty response from AI")
    return strip_code_fence(text)


def generate_text(content: str, system_instruction: str) -> str:
    """Plain text reply from the fast model"""
    model, _ = select_model(False)
    return _forward(content, system_instruction, model, None)


def _forward(
    content: str,
    system_instruction: str,
    model: str,
    budget: int | None,
    json_schema: dict | None = None,
) -> str:
    provider = config.LLM_PROVIDER
    logger.info(
        f"LLM request to {provider} ({model}), content length: {len(content)}, "
        f"reasoning budget: {budget}"
    )
    if provider == "gemini":
        text = _call_gemini(content, system_instruction, model, budget, json_schema)
    else:
        text = _call_openrouter(content, system_instruction, model, budget, json_schema)

    preview = (text or "")[:100].replace("\n", " ").strip()
    logger.info(f"LLM response ({provider}): length {len(text or '')}, preview: {preview}")
    return text or ""


def _call_openrouter(
    content: str,
    system_instruction: str,
    model: str,
    budget: int | None,
    json_schema: dict | None,
) -> str:
    if openrouter_client is None:
        logger.error("OpenRouter client not initialized")
        raise TransportError("OpenRouter client not initialized. Check OPENROUTER_API_KEY.")

    kwargs = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_instruction},
            {"role": "user", "content": content},
        ],
    }
    if json_schema is not None:
        kwargs["response_format"] = {
            "type": "json_schema",
            "json_schema": {
                "name": "workspace_files",
                "strict": True,
                "schema": {**json_schema, "additionalProperties": False},
            },
        }
    if budget:
        kwargs["extra_body"] = {"reasoning": {"max_tokens": budget}}

    try:
        response = openrouter_client.chat.completions.create(**kwargs)
    except openai.APIError as e:
        logger.error(f"LLM error (openrouter): {e}")
        raise TransportError(f"OpenRouter API error: {e}")

    if not response.choices:
        raise MalformedResponseError("No choices in OpenRouter response")
    return response.choices[0].message.content or ""


def _gemini_schema(schema: dict) -> dict:
    """Translate a JSON schema to the Gemini OpenAPI subset (upper-case types)"""
    converted = {"type": schema["type"].upper()}
    if "properties" in schema:
        converted["properties"] = {
            name: _gemini_schema(prop) for name, prop in schema["properties"].items()
        }
    if "required" in schema:
        converted["required"] = list(schema["required"])
    return converted


def _call_gemini(
    content: str,
    system_instruction: str,
    model: str,
    budget: int | None,
    json_schema: dict | None,
) -> str:
    if not config.GEMINI_API_KEY:
        logger.error("Gemini API key not configured")
        raise TransportError("Gemini client not initialized. Check GEMINI_API_KEY.")

    generation_config = {}
    if json_schema is not None:
        generation_config["responseMimeType"] = "application/json"
        generation_config["responseSchema"] = _gemini_schema(json_schema)
    if budget:
        generation_config["thinkingConfig"] = {"thinkingBudget": budget}

    data = {
        "systemInstruction": {"parts": [{"text": system_instruction}]},
        "contents": [{"parts": [{"text": content}]}],
    }
    if generation_config:
        data["generationConfig"] = generation_config

    headers = {"Content-Type": "application/json", "X-goog-api-key": config.GEMINI_API_KEY}

    try:
        response = requests.post(
            GEMINI_URL.replace("{MODEL}", model),
            headers=headers,
            json=data,
            timeout=config.LLM_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"LLM error (gemini): {e}")
        raise TransportError(f"Gemini API error: {e}")

    if response.status_code != 200:
        error_msg = f"HTTP {response.status_code}: {response.text}"
        logger.error(f"LLM error (gemini): {error_msg}")
        raise TransportError(f"Gemini API returned status {response.status_code}")

    try:
        response_json = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Gemini returned a non-JSON body: {e}")

    if not response_json or not response_json.get("candidates"):
        logger.error(f"LLM error (gemini): No candidates in response: {response_json}")
        return ""

    candidate = response_json["candidates"][0]
    parts = (candidate.get("content") or {}).get("parts") or []
    # thinking models may return thought parts ahead of the answer
    texts = [part.get("text", "") for part in parts if not part.get("thought")]
    return "".join(texts)
