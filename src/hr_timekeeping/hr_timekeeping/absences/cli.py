from __future__ import annotations

import click
from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.cli.command("detect-absences")
    @click.option("--date", "date_s", default=None, help="Target day (YYYY-MM-DD). Defaults to the configured lookback.")
    def detect_absences(date_s):
        """Run absence detection now (manual trigger or backfill)."""

        detector = container.absence_detector
        if date_s:
            try:
                target = parse_iso_date(date_s)
            except ValueError as e:
                raise click.BadParameter(f"expected YYYY-MM-DD, got {date_s!r}", param_hint="--date") from e
            summaries = [detector.detect_for_date(target)]
        else:
            summaries = detector.run()

        for s in summaries:
            reason = f" (skipped: {s.skipped_reason})" if s.skipped_reason else ""
            click.echo(
                f"{s.target_date.isoformat()}: checked={s.checked} absences={s.absences} "
                f"recovery={s.recovery_skips} with_records={s.evidence_skips} failed={s.failed}{reason}"
            )
