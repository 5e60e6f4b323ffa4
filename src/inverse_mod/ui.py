from typing import Union

from rich.panel import Panel
from rich.table import Table

from inverse_mod.outcome import Method, Outcome

COLORS = {
    "seed": "bold yellow",
    "step": "cyan",
    "final": "bold spring_green2",
    "failure": "bold red",
    "fallback": "magenta",
}


def render_trace(base: int, modulus: int, outcome: Outcome) -> Union[Table, Panel]:
    """Render the multiplier/remainder trace of an outcome."""
    if not outcome.success:
        body = f"[{COLORS['failure']}]{outcome.reason.value}[/{COLORS['failure']}]  {outcome.message}"
        if outcome.remainders:
            body += "\nr[] = " + " -> ".join(str(r) for r in outcome.remainders)
        return Panel(body, title=f"{base} mod {modulus}", border_style="red")

    title = f"{base}⁻¹ mod {modulus} = {outcome.inverse}  |  {outcome.method.value}  |  {outcome.explored_nodes} nodes"
    table = Table(title=title)
    table.add_column("Step", justify="right")
    table.add_column("r(i-1)", justify="right")
    table.add_column("k(i)", justify="right")
    table.add_column("r(i)", justify="right")

    table.add_row("0", "", "", f"[{COLORS['seed']}]{outcome.remainders[0]}[/{COLORS['seed']}]")

    last = len(outcome.multipliers)
    style = COLORS["fallback"] if outcome.method is Method.EXTENDED_EUCLID else COLORS["step"]
    for n, multiplier in enumerate(outcome.multipliers, start=1):
        remainder_style = COLORS["final"] if n == last else style
        table.add_row(
            str(n),
            str(outcome.remainders[n - 1]),
            f"[{style}]{multiplier}[/{style}]",
            f"[{remainder_style}]{outcome.remainders[n]}[/{remainder_style}]",
        )
    return table
