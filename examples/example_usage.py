"""Example: drive the lifecycle controller directly (without Flask).

Controllers are a thin layer; the attendance flow lives in the lifecycle controller.
"""

import importlib
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    lifecycle = container.lifecycle

    lifecycle.resume()
    if len(sys.argv) == 3:
        lifecycle.login(sys.argv[1], sys.argv[2])

    snapshot = lifecycle.snapshot()
    print(snapshot.state.value, snapshot.employee_email, snapshot.message or snapshot.error or "")
    for row in snapshot.history[:5]:
        print(row["date"], row["check_in"], row["check_out"], row["total_hours"], row["status"])


if __name__ == "__main__":
    main()
