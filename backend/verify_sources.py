import asyncio
import argparse
from dotenv import load_dotenv
from football_oracle.infrastructure.data_sources.football_data_org import FootballDataOrgSource
from football_oracle.infrastructure.ai.gemini_source import GeminiPredictionSource
from football_oracle.domain.services.stats_synthesizer import StatsSynthesizer
from football_oracle.domain.exceptions import PredictionException


async def verify(predict: bool):
    load_dotenv()

    source = FootballDataOrgSource()
    if not source.is_configured:
        print("⚠ FOOTBALL_DATA_API_KEY not set, expecting the built-in fixtures")

    matches = await source.get_upcoming_matches()
    print(f"✅ {len(matches)} fixtures")
    for m in matches[:5]:
        print(f"  - [{m.id}] {m.home_team.name} vs {m.away_team.name} ({m.utc_date}, {m.status})")

    if not matches:
        return

    first = matches[0]
    stats = await source.get_match_stats(first.id, first.home_team.id, first.away_team.id)
    label = "live"
    if stats is None:
        stats = StatsSynthesizer.synthesize_for_match(first)
        label = "synthetic"
    print(f"✅ Stats ({label}): form {[r.value for r in stats.home_form]} vs "
          f"{[r.value for r in stats.away_form]}, H2H {stats.h2h.last_result}, "
          f"win rate {stats.win_rate.home}%/{stats.win_rate.away}%")

    if not predict:
        return

    gemini = GeminiPredictionSource()
    try:
        prediction = await gemini.predict_match(first.home_team.name, first.away_team.name)
    except PredictionException as e:
        print(f"❌ Prediction failed: {e}")
        return

    print(f"✅ Prediction: {prediction.winner} {prediction.scoreline} "
          f"({prediction.win_probability.home}/{prediction.win_probability.draw}/{prediction.win_probability.away})")
    for link in prediction.sources or []:
        print(f"  - {link.title}: {link.uri}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check the configured vendors end to end.")
    parser.add_argument("--predict", action="store_true", help="Also call Gemini for the first fixture")
    args = parser.parse_args()
    asyncio.run(verify(args.predict))
