"""
Google Gemini Prediction Source

Generates match predictions with a Gemini model grounded on live Google
Search results, and extracts the citations the model consulted.

API Documentation: https://ai.google.dev/gemini-api/docs/grounding
"""

import os
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

import google.generativeai as genai

from football_oracle.domain.entities.entities import Prediction, SourceLink, WinProbability
from football_oracle.domain.exceptions import (
    GENERIC_PREDICTION_MESSAGE,
    PredictionConfigurationError,
    PredictionException,
    PredictionRateLimitError,
    PredictionUsageError,
)
from football_oracle.utils.time_utils import get_current_time


logger = logging.getLogger(__name__)


class GroundingMode(str, Enum):
    """Grounding capability requested from the model."""
    GOOGLE_SEARCH_RETRIEVAL = "google_search_retrieval"
    NONE = "none"


@dataclass(frozen=True)
class GroundingToolConfig:
    """
    Typed description of the grounding tool sent with each request.

    Attributes:
        mode: Which grounding tool to enable
        dynamic_threshold: Only search when the model's retrieval score exceeds
            this value (0-1). None always searches.
    """
    mode: GroundingMode = GroundingMode.GOOGLE_SEARCH_RETRIEVAL
    dynamic_threshold: Optional[float] = None

    def to_tools(self) -> Optional[list]:
        """Build the SDK tool list for this configuration."""
        if self.mode == GroundingMode.NONE:
            return None

        if self.dynamic_threshold is None:
            retrieval = genai.protos.GoogleSearchRetrieval()
        else:
            retrieval = genai.protos.GoogleSearchRetrieval(
                dynamic_retrieval_config=genai.protos.DynamicRetrievalConfig(
                    mode=genai.protos.DynamicRetrievalConfig.Mode.MODE_DYNAMIC,
                    dynamic_threshold=self.dynamic_threshold,
                )
            )
        return [genai.protos.Tool(google_search_retrieval=retrieval)]


@dataclass
class GeminiConfig:
    """Configuration for the Gemini API."""
    api_key: Optional[str] = None
    model_name: Optional[str] = None
    grounding: GroundingToolConfig = field(default_factory=GroundingToolConfig)

    def __post_init__(self):
        if self.api_key is None:
            self.api_key = os.getenv("GEMINI_API_KEY")
        if self.model_name is None:
            self.model_name = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")


def build_prediction_prompt(home_team: str, away_team: str, today: datetime) -> str:
    """Prompt asking for a search-grounded verdict returned as strict JSON."""
    return f"""
    Today's Date: {today.strftime("%d/%m/%Y")}

    You are a Senior Football Statistician with real-time web access.
    INSTRUCTION: Search for the latest {today.year} team news, current managers, and injury lists for {home_team} and {away_team} before generating the prediction.
    Analyze this real-time data to generate an elite-level match prediction.

    Return ONLY a JSON object with the following structure:
    {{
      "winner": "Team Name or Draw",
      "scoreline": "H-A",
      "winProbability": {{
        "home": number (0-100),
        "away": number (0-100),
        "draw": number (0-100)
      }},
      "tacticalBreakdown": "A detailed 2-3 paragraph analysis of the match including insights from your search."
    }}
    """


def deduplicate_sources(links: list[SourceLink]) -> list[SourceLink]:
    """Keep the first link for each URI, preserving order."""
    seen: set[str] = set()
    unique = []
    for link in links:
        if link.uri in seen:
            continue
        seen.add(link.uri)
        unique.append(link)
    return unique


def extract_grounding(response: Any) -> tuple[Optional[list[SourceLink]], Optional[str]]:
    """
    Pull citations and the search attribution fragment out of a response.

    Returns:
        Tuple of (deduplicated sources or None when there are none,
        rendered search entry HTML or None)
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None, None

    metadata = getattr(candidates[0], "grounding_metadata", None)
    if not metadata:
        return None, None

    links = []
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        if not web or not getattr(web, "uri", None):
            continue
        links.append(SourceLink(title=getattr(web, "title", "") or "", uri=web.uri))

    sources = deduplicate_sources(links)

    entry_point = getattr(metadata, "search_entry_point", None)
    search_html = getattr(entry_point, "rendered_content", None) if entry_point else None

    return (sources or None), (search_html or None)


def _is_rate_limited(error: Exception) -> bool:
    if "429" in str(error):
        return True
    return getattr(error, "code", None) == 429 or getattr(error, "status", None) == 429


def translate_error(error: Exception) -> PredictionException:
    """Map any failure onto the prediction exception hierarchy."""
    if _is_rate_limited(error):
        return PredictionRateLimitError()
    if isinstance(error, PredictionException):
        return error
    return PredictionException(str(error) or GENERIC_PREDICTION_MESSAGE)


def _is_number(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_prediction(
    data: Any,
    sources: Optional[list[SourceLink]],
    search_html: Optional[str],
) -> Prediction:
    if not isinstance(data, dict):
        raise PredictionException("Malformed prediction payload: expected a JSON object")

    missing = [k for k in ("winner", "scoreline", "winProbability") if k not in data]
    if missing:
        raise PredictionException(f"Malformed prediction payload: missing {', '.join(missing)}")

    not_text = [
        k for k in ("winner", "scoreline", "tacticalBreakdown")
        if not isinstance(data.get(k, ""), str)
    ]
    if not_text:
        raise PredictionException(
            f"Malformed prediction payload: {', '.join(not_text)} must be text"
        )

    probability = data["winProbability"]
    if not isinstance(probability, dict):
        raise PredictionException("Malformed prediction payload: winProbability must be an object")

    not_numeric = [k for k in ("home", "away", "draw") if not _is_number(probability.get(k))]
    if not_numeric:
        raise PredictionException(
            "Malformed prediction payload: "
            + ", ".join(f"winProbability.{k}" for k in not_numeric)
            + " must be numbers"
        )

    return Prediction(
        winner=data["winner"],
        scoreline=data["scoreline"],
        win_probability=WinProbability(
            home=probability["home"],
            away=probability["away"],
            draw=probability["draw"],
        ),
        tactical_breakdown=data.get("tacticalBreakdown", ""),
        sources=sources,
        search_html=search_html,
    )


class GeminiPredictionSource:
    """
    Prediction source backed by Google Gemini with search grounding.

    Each call is a single request; there is no retry. Rate limiting is
    surfaced as PredictionRateLimitError, everything else as
    PredictionException.
    """

    def __init__(self, config: Optional[GeminiConfig] = None):
        self.config = config or GeminiConfig()

    @property
    def is_configured(self) -> bool:
        """Check if API key is configured."""
        return bool(self.config.api_key)

    def _build_model(self) -> "genai.GenerativeModel":
        genai.configure(api_key=self.config.api_key)
        return genai.GenerativeModel(
            model_name=self.config.model_name,
            tools=self.config.grounding.to_tools(),
        )

    async def predict_match(self, home_team: str, away_team: str) -> Prediction:
        """
        Generate a grounded prediction for a fixture.

        Args:
            home_team: Home team name
            away_team: Away team name

        Returns:
            Prediction with citations when the model returned any

        Raises:
            PredictionUsageError: a team name is missing
            PredictionConfigurationError: GEMINI_API_KEY is not set
            PredictionRateLimitError: the vendor answered 429
            PredictionException: any other failure, including unparseable output
        """
        if not (home_team and home_team.strip()) or not (away_team and away_team.strip()):
            raise PredictionUsageError("Missing team names")

        if not self.is_configured:
            raise PredictionConfigurationError("Gemini API key is not configured (GEMINI_API_KEY)")

        prompt = build_prediction_prompt(home_team, away_team, get_current_time())

        try:
            logger.info(f"Attempting grounded prediction for {home_team} vs {away_team}...")

            model = self._build_model()
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.GenerationConfig(response_mime_type="application/json"),
            )

            data = json.loads(response.text)
            sources, search_html = extract_grounding(response)
            return _parse_prediction(data, sources, search_html)

        except Exception as e:
            logger.error(f"Prediction error: {e}")
            translated = translate_error(e)
            if translated is e:
                raise
            raise translated from e
