#!/usr/bin/env python3
"""Wipe the locally stored learner progress, history and preferences."""

import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from mentor_api.config import Settings, load_settings  # noqa: E402
from mentor_api.database import close_mongo_connection  # noqa: E402
from mentor_api.storage import ProgressStore  # noqa: E402


def reset_learner_data(settings: Optional[Settings] = None) -> None:
    """Remove the namespaced learner blob from the configured backend."""
    settings = settings or load_settings()
    if not (settings.enable_mongodb or settings.storage_path):
        print("No persistent storage configured. Set ENABLE_MONGODB=true or MENTOR_STORAGE_PATH in .env")
        sys.exit(1)

    store = ProgressStore.from_settings(settings)

    stats = store.get_overall_stats()
    print(f"Clearing learner data stored under '{settings.storage_key}'...")
    print(f"   - {stats['activeRoles']} roles with progress")
    print(f"   - {stats['totalAssessments']} assessment results")
    print(f"   - {stats['totalChatMessages']} chat messages")

    try:
        store.clear_all_data()
    finally:
        close_mongo_connection()
    print("\nLearner data reset complete.")


if __name__ == "__main__":
    print("This will DELETE all stored learner progress.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == "yes":
        reset_learner_data()
    else:
        print("Reset cancelled.")
