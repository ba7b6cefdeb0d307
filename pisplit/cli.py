import logging

import click

from .chudnovsky import compute_pi
from .partition import EXECUTOR_KINDS
from .verify import VERIFY_METHODS, extract_fractional_digits, verify_fractional_digits


logger = logging.getLogger(__name__)


def _echo_stats(result):
    plan = result.plan
    t = result.timings
    per_digit = max(plan.digits, 1)
    click.echo(f"#terms={plan.iters_needed}, depth={plan.depth}, workers={plan.threads}", err=True)
    click.echo(f"split    wallclock = {t['split']:.3f}", err=True)
    click.echo(f"reduce   wallclock = {t['reduce']:.3f}", err=True)
    click.echo(f"assemble wallclock = {t['assemble']:.3f}", err=True)
    click.echo(f"render   wallclock = {t['render']:.3f}", err=True)
    click.echo(f"total    wallclock = {t['total']:.3f}", err=True)
    click.echo(f"   P size={result.p_digits} digits ({result.p_digits / per_digit:f})", err=True)
    click.echo(f"   Q size={result.q_digits} digits ({result.q_digits / per_digit:f})", err=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("digits", default=60, type=click.IntRange(min=0), required=False)
@click.argument("threads", default=1, type=click.IntRange(min=1), required=False)
@click.option("--executor", type=click.Choice(EXECUTOR_KINDS, case_sensitive=False), default="process", show_default=True)
@click.option("--verify/--no-verify", default=False, show_default=True)
@click.option("--verify-samples", default=1000, show_default=True, type=int)
@click.option("--verify-method", type=click.Choice(VERIFY_METHODS, case_sensitive=False), default="spigot", show_default=True)
@click.option("--factor/--no-factor", default=False, show_default=True, help="Cancel common prime factors of P and G while splitting.")
@click.option("--stats", is_flag=True, help="Print term count, timings and integer sizes to stderr.")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
def main(
    digits: int,
    threads: int,
    executor: str,
    factor: bool,
    verify: bool,
    verify_samples: int,
    verify_method: str,
    stats: bool,
    verbose: bool,
):
    """Print DIGITS decimal places of pi using THREADS workers."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")
    try:
        result = compute_pi(digits, workers=threads, executor=executor, factor=factor)
    except ValueError as e:
        raise click.ClickException(str(e))
    if stats:
        _echo_stats(result)
    if verify:
        fractional = extract_fractional_digits(result.text)
        ok, kind = verify_fractional_digits(fractional, verify_samples, method=verify_method)
        if not ok:
            raise click.ClickException(f"verification failed ({kind})")
        logger.debug("verified %d digits (%s)", min(verify_samples, digits), kind)
    click.echo(result.text)
