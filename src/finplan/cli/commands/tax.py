"""Tax estimate commands."""

from dataclasses import asdict

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.cli.formatting import echo_heading, echo_row, format_money
from finplan.domain.entities import RetirementFundLimits, TaxPlan, TaxResult
from finplan.domain.planning import PlanningService
from finplan.utils.amount_parser import parse_amount

PLAN_OPTIONS = [
    ("rmf", "RMF purchase"),
    ("ssf", "SSF purchase"),
    ("gov_pension_fund", "Government pension fund contribution"),
    ("pvd", "Provident fund contribution"),
    ("national_savings_fund", "National savings fund contribution"),
    ("pension_insurance", "Pension insurance premium"),
]

# Subtotals shown in the summary rather than the breakdown
ITEMIZED_SUBTOTALS = {"pension_insurance_portion", "retirement_group", "before_donation", "base_for_donation"}


def _echo_tax_result(result: TaxResult, breakdown: bool) -> None:
    echo_row("Total income", format_money(result.total_income))
    echo_row("Expense deductions", format_money(result.total_expense_deductions))
    echo_row("Itemized deductions", format_money(result.total_itemized_deductions))
    echo_row("Net income", format_money(result.income_after_deductions))
    echo_row("Tax (progressive rates)", format_money(result.method1_tax))
    echo_row("Tax (0.5% of non-salary income)", format_money(result.method2_tax))
    echo_row("Tax to pay", format_money(result.tax_to_pay))

    if not breakdown:
        return

    echo_heading("Expense deductions")
    for name, amount in asdict(result.expense_deductions).items():
        if amount:
            echo_row(name, format_money(amount))
    echo_heading("Itemized deductions")
    for name, amount in asdict(result.itemized_deductions).items():
        if amount and name not in ITEMIZED_SUBTOTALS:
            echo_row(name, format_money(amount))
    echo_row("retirement fund group", format_money(result.itemized_deductions.retirement_group))


def _echo_limits(title: str, limits: RetirementFundLimits) -> None:
    echo_heading(title)
    for name, amount in asdict(limits).items():
        echo_row(name, format_money(amount))


@click.command("tax")
@click.option("--breakdown/--no-breakdown", default=True, help="Show each deduction")
@click.pass_context
def tax(ctx, breakdown: bool):
    """Estimate personal income tax from stored incomes and deductions."""
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        result = service.tax()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_tax_result(result, breakdown)


@click.command("tax-plan")
@click.option("--rmf", help="Additional RMF purchase")
@click.option("--ssf", help="Additional SSF purchase")
@click.option("--gov-pension-fund", help="Additional government pension fund contribution")
@click.option("--pvd", help="Additional provident fund contribution")
@click.option("--national-savings-fund", help="Additional national savings fund contribution")
@click.option("--pension-insurance", help="Additional pension insurance premium")
@click.option("--save", is_flag=True, help="Store the plan after capping it to the room left")
@click.pass_context
def tax_plan(ctx, save: bool, **amounts: str | None):
    """Show how much tax extra retirement savings would save.

    Without any amount options the stored plan is used. Each amount is
    capped to the room left in its fund.

    Examples:
        finplan tax-plan --rmf 100000 --ssf 50,000
        finplan tax-plan --pvd 30000 --save
    """
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        plan = None
        if any(value is not None for value in amounts.values()):
            plan = TaxPlan(
                **{
                    name: float(parse_amount(amounts[name])) if amounts[name] is not None else 0.0
                    for name, _ in PLAN_OPTIONS
                }
            )
        result = service.tax_plan(plan, save=save)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_limits("Maximum allowance", result.room.maximum)
    _echo_limits("Already used", result.room.used)
    _echo_limits("Remaining", result.room.remaining)

    echo_heading("Plan")
    for name, label in PLAN_OPTIONS:
        echo_row(label, format_money(getattr(result.plan, name)))

    echo_heading("Tax")
    echo_row("Tax before plan", format_money(result.baseline.tax_to_pay))
    echo_row("Tax after plan", format_money(result.planned.tax_to_pay))
    echo_row("Tax saved", format_money(result.tax_saved))

    if save:
        click.echo("\nPlan saved.")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax)
    cli.add_command(tax_plan)
