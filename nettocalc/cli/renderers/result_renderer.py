"""Rich renderers for net-salary results, raw wage-tax output and year rules.

Transforms SDK output (dicts from ``TaxResult.to_dict()`` and
``model_dump()``) into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def _euros(value) -> str:
    return f"{float(value):,.2f} €"


def render_tax_result(console: Console, data: dict, title: str = "Net salary (monthly)") -> None:
    """Render a net-salary result.

    Args:
        console: Rich Console instance
        data: Output of TaxResult.to_dict()
        title: Table title
    """
    if "error" in data:
        console.print(Panel(f"[red]{data['error']}[/red]", title="Error", border_style="red"))
        return

    table = Table(title=title, box=box.SIMPLE_HEAVY, show_header=True)
    table.add_column("Item")
    table.add_column("Amount", justify="right")

    table.add_row("Gross", _euros(data["gross"]))

    taxes = data["taxes"]
    table.add_row("Wage tax (Lohnsteuer)", f"[red]-{_euros(taxes['lohnsteuer'])}[/red]")
    table.add_row("Solidarity surcharge", f"[red]-{_euros(taxes['soli'])}[/red]")
    table.add_row("Church tax", f"[red]-{_euros(taxes['kirchensteuer'])}[/red]")

    social = data["socialSecurity"]
    table.add_row("Health insurance (KV)", f"[red]-{_euros(social['kv'])}[/red]")
    table.add_row("Pension insurance (RV)", f"[red]-{_euros(social['rv'])}[/red]")
    table.add_row("Unemployment insurance (AV)", f"[red]-{_euros(social['av'])}[/red]")
    table.add_row("Care insurance (PV)", f"[red]-{_euros(social['pv'])}[/red]")

    table.add_section()
    table.add_row("[bold]Net[/bold]", f"[bold green]{_euros(data['netto'])}[/bold green]")
    console.print(table)

    one_off = data.get("oneOff")
    if one_off:
        extra = Table(title="One-off payment (yearly)", box=box.SIMPLE, show_header=False)
        extra.add_column("Item", style="dim")
        extra.add_column("Amount", justify="right")
        extra.add_row("Wage tax", _euros(one_off["lohnsteuer"]))
        extra.add_row("Solidarity surcharge", _euros(one_off["soli"]))
        extra.add_row("Church tax", _euros(one_off["kirchensteuer"]))
        console.print(extra)


# Labels for the raw procedure output, in display order
WAGE_TAX_LABELS = [
    ("wage_tax", "Wage tax (LSTLZZ)"),
    ("solidarity_surcharge", "Solidarity surcharge (SOLZLZZ)"),
    ("church_tax_base", "Church-tax base (BK)"),
    ("private_insurance_deduction", "Private insurance deduction (VKVLZZ)"),
    ("one_off_wage_tax", "One-off wage tax (STS)"),
    ("one_off_solidarity_surcharge", "One-off surcharge (SOLZS)"),
    ("one_off_church_tax_base", "One-off church-tax base (BKS)"),
    ("one_off_private_insurance_deduction", "One-off insurance deduction (VKVSONST)"),
    ("consumed_allowances", "Consumed allowances (VFRB)"),
    ("taxable_above_basic", "Taxable above basic allowance (WVFRB)"),
]


def render_wage_tax_output(console: Console, data: dict) -> None:
    """Render raw wage-tax output (amounts in cents).

    Args:
        console: Rich Console instance
        data: WageTaxOutput.model_dump()
    """
    table = Table(title="Wage-tax procedure output", box=box.SIMPLE_HEAVY)
    table.add_column("Field")
    table.add_column("Cents", justify="right")
    table.add_column("Euros", justify="right", style="dim")

    for key, label in WAGE_TAX_LABELS:
        cents = data[key]
        table.add_row(label, str(cents), _euros(float(cents) / 100))
    console.print(table)


def render_tax_rules(console: Console, data: dict) -> None:
    """Render one year's rules as nested sections.

    Args:
        console: Rich Console instance
        data: TaxRules.model_dump()
    """
    table = Table(title=f"Tax rules {data['year']}", box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="dim")
    table.add_column("Value", justify="right")

    for section, values in data.items():
        if not isinstance(values, dict):
            continue
        table.add_section()
        table.add_row(f"[bold]{section}[/bold]", "")
        for key, value in _flatten(values):
            table.add_row(f"  {key}", "-" if value is None else str(value))
    console.print(table)


def _flatten(values: dict, prefix: str = ""):
    for key, value in values.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from _flatten(value, prefix=f"{name}.")
        else:
            yield name, value
