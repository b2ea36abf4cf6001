"""
Data loading functions for user records.

Records are plain dictionaries in the shape the data-access layer hands
over:

    {
        "id": 7,
        "profile": {"nickname", "birthday", "gender", "mbti", "interests",
                    "province", "city", "profile_image_url"},
        "personality": {"openness", "conscientiousness", "extraversion",
                        "agreeableness", "neuroticism"},
        "love_language": {"words_of_affirmation", "acts_of_service",
                          "receiving_gifts", "quality_time", "physical_touch"}
    }

JSON files hold a list of such records. CSV files hold one flat row per
user with the same column names; they are regrouped into records here.
No feature extraction is done here - that's handled by the features module.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..features.extraction import age_from_birthday, record_to_features
from ..features.schema import LOVE_LANGUAGE_FIELDS, PERSONALITY_FIELDS
from ..feed.ranking import FeedCandidate

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "nickname", "birthday", "gender", "mbti", "interests",
    "province", "city", "profile_image_url",
)


def load_user_records(filepath: str) -> List[Dict[str, Any]]:
    """
    Load user records from a JSON or CSV file.

    Args:
        filepath: Path to a .json or .csv file

    Returns:
        List of nested user records

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has an unsupported format
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"User data file not found: {filepath}")

    suffix = path.suffix.lower()
    logger.info(f"Loading user records from {filepath}")

    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"Expected a list of user records in {filepath}")
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype={"mbti": str, "interests": str})
        records = records_from_frame(df)
    else:
        raise ValueError(f"Unsupported user data format: {suffix}")

    if not records:
        raise ValueError(f"User data file is empty: {filepath}")

    logger.info(f"Loaded {len(records)} user records")
    return records


def _row_section(row: Dict[str, Any], fields) -> Optional[Dict[str, Any]]:
    section = {f: row.get(f) for f in fields if f in row}
    if all(v is None for v in section.values()):
        return None
    return section


def records_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Regroup flat user rows into nested records.

    Args:
        df: DataFrame with an "id" column plus profile, personality and
            love-language columns

    Returns:
        List of nested user records

    Raises:
        ValueError: If the "id" column is missing
    """
    if "id" not in df.columns:
        raise ValueError("User data is missing the 'id' column")

    # NaN cells become None so missing values read as absent
    df = df.astype(object).where(pd.notna(df), None)

    records = []
    for row in df.to_dict(orient="records"):
        records.append({
            "id": int(row["id"]),
            "profile": {f: row.get(f) for f in PROFILE_FIELDS if f in row},
            "personality": _row_section(row, PERSONALITY_FIELDS),
            "love_language": _row_section(row, LOVE_LANGUAGE_FIELDS),
        })
    return records


def find_record(records: List[Dict[str, Any]], user_id: int) -> Dict[str, Any]:
    """
    Find the record of one user.

    Raises:
        KeyError: If no record has the given id
    """
    for record in records:
        if record.get("id") == user_id:
            return record
    raise KeyError(f"No user record with id {user_id}")


def candidates_from_records(
    records: List[Dict[str, Any]],
    exclude_user_id: Optional[int] = None,
    today: Optional[date] = None
) -> List[FeedCandidate]:
    """
    Build feed candidates from user records.

    Args:
        records: Nested user records
        exclude_user_id: User to leave out (normally the requesting user)
        today: Reference date for age computation

    Returns:
        List of FeedCandidate
    """
    candidates = []
    for record in records:
        if record.get("id") == exclude_user_id:
            continue
        profile = record.get("profile") or {}
        candidates.append(FeedCandidate(
            user_id=record["id"],
            features=record_to_features(record),
            nickname=profile.get("nickname") or "",
            age=age_from_birthday(profile.get("birthday"), today=today),
            profile_image_url=profile.get("profile_image_url")
        ))
    return candidates
