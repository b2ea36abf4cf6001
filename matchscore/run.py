"""
Command-line runner for feed ranking.

Scores every user in a data file against one requesting user and writes
the ranked feed.

Usage:
    python -m matchscore.run --users data/sample_users.json --current-id 1
    python -m matchscore.run --users users.csv --current-id 3 --location Seoul --output feed.csv

The runner performs the following steps:
1. Load and validate configuration
2. Load user records
3. Extract features for the current user and all candidates
4. Score, filter and rank candidates
5. Report the score distribution and write the feed
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_feed(
    users_path: str,
    current_id: int,
    config_path: Optional[str] = None,
    age: Optional[int] = None,
    gender: Optional[str] = None,
    location: Optional[str] = None,
    top: Optional[int] = None,
    output_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Rank the feed for one user.

    Args:
        users_path: Path to the user records file (.json or .csv)
        current_id: Id of the requesting user
        config_path: Optional path to the configuration YAML file
        age: Optional exact-age filter
        gender: Optional candidate gender filter
        location: Optional city/province filter
        top: Number of entries to keep (defaults to config feed.top)
        output_path: If provided, write the feed to this CSV file

    Returns:
        Dictionary with the feed DataFrame, the report and a success flag
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import candidates_from_records, find_record, load_user_records
    from .evaluation import create_feed_report
    from .features import record_to_features
    from .feed import FeedFilter, feed_to_frame, rank_candidates
    from .scoring import create_engine_from_config

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    config: Dict[str, Any] = {}
    if config_path:
        config = load_config(config_path)
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")
        setup_logging(get_config_value(config, "global.log_level", "INFO"))

    engine = create_engine_from_config(config)

    # =========================================================================
    # 2. Load records and extract features
    # =========================================================================
    records = load_user_records(users_path)
    current = record_to_features(find_record(records, current_id))
    candidates = candidates_from_records(records, exclude_user_id=current_id)
    logger.info(f"Scoring {len(candidates)} candidates for user {current_id}")

    # =========================================================================
    # 3. Rank
    # =========================================================================
    filters = FeedFilter(age=age, gender=gender, location=location)
    entries = rank_candidates(engine, current, candidates, filters)

    top = top if top is not None else get_config_value(config, "feed.top")
    if top is not None:
        entries = entries[:top]

    frame = feed_to_frame(entries)
    report = create_feed_report(frame)
    logger.info("\n" + report.summary())

    # =========================================================================
    # 4. Write output
    # =========================================================================
    if output_path:
        frame.to_csv(output_path, index=False)
        logger.info(f"Wrote {len(frame)} feed entries to {output_path}")
    else:
        logger.info("\n" + frame.to_string(index=False))

    return {"success": True, "feed": frame, "report": report}


def main(argv=None):
    """Main entry point for the feed runner."""
    parser = argparse.ArgumentParser(
        description="Rank compatible users for one requesting user"
    )
    parser.add_argument("--users", type=str, required=True, help="User records file (.json or .csv)")
    parser.add_argument("--current-id", type=int, required=True, help="Id of the requesting user")
    parser.add_argument("--config", type=str, default=None, help="Path to configuration file")
    parser.add_argument("--age", type=int, default=None, help="Keep candidates of this age")
    parser.add_argument("--gender", type=str, default=None, help="Keep candidates of this gender")
    parser.add_argument("--location", type=str, default=None, help="Keep candidates in this city or province")
    parser.add_argument("--top", type=int, default=None, help="Number of feed entries to keep")
    parser.add_argument("--output", type=str, default=None, help="Write the feed to this CSV file")

    args = parser.parse_args(argv)

    try:
        result = run_feed(
            args.users,
            args.current_id,
            config_path=args.config,
            age=args.age,
            gender=args.gender,
            location=args.location,
            top=args.top,
            output_path=args.output
        )
        return 0 if result["success"] else 1
    except Exception as e:
        logger.exception(f"Feed ranking failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
