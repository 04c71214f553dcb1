from pathlib import Path

from evidence_privacy.config.settings import Settings
from evidence_privacy.intake.submission_runner import build_submission_runner
from evidence_privacy.logging.logger import Log


def collect_submission(inbox_dir: Path) -> list[Path]:
    """Regular files in the inbox, sorted by name for a stable manifest order."""
    return sorted(path for path in inbox_dir.iterdir() if path.is_file())


def main() -> None:
    """Entry point: configure logging -> build runner -> sanitize inbox once."""
    settings = Settings()
    Log.configure(settings.log_level)

    paths = collect_submission(settings.inbox_dir)
    Log.info(f"Found {len(paths)} files in inbox")
    runner = build_submission_runner(settings)
    runner.run(paths)


if __name__ == "__main__":
    main()
