"""
Wipe the scheduler tables (card_state and review_log).

Every card goes back to NEW and the review history is gone.
Meant for local and test databases.

Usage:
    python -m scripts.maintenance.reset_review_db
"""

from vocab_srs import fsrs
from vocab_srs.fsrs.database import get_engine

def main():
    print("=" * 60)
    print("Reset scheduler tables")
    print("=" * 60)
    print()
    print(f"Database: {get_engine().url.render_as_string(hide_password=True)}")
    print("Test mode:", "yes" if fsrs.is_test_mode() else "NO (production)")
    print()
    print("Deleted on confirm:")
    print("  - card_state (stability, difficulty, phase, due time)")
    print("  - review_log (every applied rating)")
    print()

    answer = input("Type 'yes' to drop and recreate the tables: ")

    if answer.strip().lower() != "yes":
        print("\nAborted, nothing changed.")
        return

    fsrs.reset_db()
    print("\n✓ Tables recreated, no cards and no reviews left.")


if __name__ == "__main__":
    main()
