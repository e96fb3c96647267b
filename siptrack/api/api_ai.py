import base64
import json
import logging
import re
from json import JSONDecodeError
from typing import Optional
from openai import OpenAI
from fastapi import APIRouter, HTTPException, UploadFile, File

from siptrack.infra import paths
from siptrack.utilities.coercion import to_non_negative
from siptrack.utilities import config
from siptrack.utilities.constants import DRINK_ANALYSIS_PROMPT, DRINK_JSON_FORMAT

logger = logging.getLogger(__name__)

ESTIMATE_FIELDS = ("volume_ml", "abv_percent", "calories", "carbs_g", "sugar_g", "unit_price")


class DrinkAnalysisError(Exception):
    """The model could not identify the drink or returned unusable output."""


class AIUnavailableError(DrinkAnalysisError):
    """No API key is configured."""


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not config.OPENAI_API_KEY:
        return None
    return OpenAI(api_key=config.OPENAI_API_KEY)


# === Drink Analysis ===
def analyze_drink_image(image_bytes: bytes, mime_type: str, client=None) -> dict:
    """Estimate brand, nutrition and price of the drink in a photo.

    Returns a dict ready to prefill the drink form (quantity forced to 1).
    Raises DrinkAnalysisError when the output cannot be turned into an estimate.
    """
    client = client or _get_openai_client()
    if client is None:
        raise AIUnavailableError("OPENAI_API_KEY not set, cannot analyze drink images.")
    if not image_bytes:
        raise DrinkAnalysisError("Empty image.")

    data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
    try:
        response = client.responses.create(
            model=config.OPENAI_MODEL,
            input=[{
                "role": "user",
                "content": [
                    {"type": "input_text", "text": DRINK_ANALYSIS_PROMPT + DRINK_JSON_FORMAT},
                    {"type": "input_image", "image_url": data_url},
                ],
            }],
        )
    except Exception as e:
        logger.exception("Error analyzing drink image")
        raise DrinkAnalysisError("Failed to analyze image. The AI model could not identify the drink.") from e

    raw = (response.output_text or "").strip()
    if not raw:
        raise DrinkAnalysisError("AI returned an empty answer.")

    parsed = parse_ai_json(raw)
    if not isinstance(parsed, dict):
        _save_raw_output(raw)
        logger.error("AI output is not valid JSON and no JSON object found")
        raise DrinkAnalysisError("Failed to analyze image. The AI model could not identify the drink.")
    return normalize_estimate(parsed)


def parse_ai_json(text: str):
    """Best-effort JSON decode of model output; None when nothing decodes."""
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass
    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.exception("Failed to decode extracted JSON from AI output")
    return None


def normalize_estimate(parsed: dict) -> dict:
    """Map the model's keys (ours or the short ones it tends to use) onto drink form fields."""
    aliases = {
        "volume_ml": ("volume_ml", "volume"),
        "abv_percent": ("abv_percent", "abv"),
        "calories": ("calories",),
        "carbs_g": ("carbs_g", "carbs"),
        "sugar_g": ("sugar_g", "sugar"),
        "unit_price": ("unit_price", "price"),
    }
    estimate = {
        "brand": str(parsed.get("brand") or "").strip(),
        "name": str(parsed.get("name") or "").strip(),
    }
    for field in ESTIMATE_FIELDS:
        value = next((parsed[k] for k in aliases[field] if k in parsed), None)
        estimate[field] = to_non_negative(value)
    if not estimate["name"]:
        raise DrinkAnalysisError("Failed to analyze image. The AI model could not identify the drink.")
    estimate["quantity"] = 1
    return estimate


def _save_raw_output(text: str) -> None:
    try:
        paths.AI_RAW_FILE.parent.mkdir(parents=True, exist_ok=True)
        paths.AI_RAW_FILE.write_text(text, encoding='utf-8')
    except OSError:
        logger.exception("Failed to write %s", paths.AI_RAW_FILE.name)


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/api/analyze-drink")
async def analyze_drink(image: UploadFile = File(...)):
    if not (image.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Invalid image type")
    content = await image.read()
    try:
        return analyze_drink_image(content, image.content_type)
    except AIUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except DrinkAnalysisError as e:
        raise HTTPException(status_code=502, detail=str(e))
