"""CLI entry point for job execution."""

import sys

import click

from quizbank.core.logging import get_logger, setup_logging
from quizbank.db.session import session_scope
from quizbank.jobs.subscriptions import expire_subscriptions

logger = get_logger(__name__)

JOBS = {
    "expire_subscriptions": expire_subscriptions,
}


@click.command()
@click.argument("job_key", type=click.Choice(sorted(JOBS)))
def run(job_key: str):
    """
    Run a scheduled job.

    Example:
        python -m quizbank.jobs.run expire_subscriptions
    """
    setup_logging()
    try:
        with session_scope() as db:
            result = JOBS[job_key](db)
    except Exception as e:
        logger.exception("Job failed", extra={"event": "job_failed", "job": job_key})
        click.echo(f"Job failed: {e}", err=True)
        sys.exit(1)

    logger.info("Job completed", extra={"event": "job_completed", "job": job_key, "result": result})
    click.echo(f"Job completed: {result}")


if __name__ == "__main__":
    run()
