"""Mapper functions to convert between stored JSON values and domain entities.

This layer isolates the conversion logic, so the record store only ever sees
plain JSON and the calculation engine only ever sees typed entities. Money,
rate and count fields are clamped to zero from below here; a missing required
field fails fast with a message naming it.
"""

from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from finplan.domain import entities as domain
from finplan.domain.errors import ValidationError, invalid_choice, missing_field
from finplan.domain.money import clamp_non_negative
from finplan.utils.date_parser import parse_date

E = TypeVar("E", bound=Enum)


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValidationError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data or data[key] is None:
        raise ValidationError(missing_field(path, key))
    return data[key]


def _name(data: dict[str, Any], path: str) -> str:
    name = str(_require(data, "name", path)).strip()
    if not name:
        raise ValidationError(f"{path}.name: must not be empty")
    return name


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{path}: expected a number")
    try:
        return clamp_non_negative(float(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{path}: expected a number, got {value!r}")


def _flag(data: dict[str, Any], key: str, path: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"{path}.{key}: expected a boolean")
    return value


def _amount(data: dict[str, Any], key: str, path: str, default: Optional[float] = None) -> float:
    if default is not None and data.get(key) is None:
        return default
    return _number(_require(data, key, path), f"{path}.{key}")


def _count(data: dict[str, Any], key: str, path: str, default: Optional[int] = None) -> int:
    return int(_amount(data, key, path, None if default is None else float(default)))


def _enum(enum_cls: type[E], value: Any, path: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(invalid_choice(path, value, [member.value for member in enum_cls]))


def _optional_enum(enum_cls: type[E], data: dict[str, Any], key: str, path: str) -> Optional[E]:
    value = data.get(key)
    if value in (None, ""):
        return None
    return _enum(enum_cls, value, f"{path}.{key}")


def _optional_date(data: dict[str, Any], key: str, path: str) -> Optional[date]:
    value = data.get(key)
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_date(str(value))
    except ValueError as e:
        raise ValidationError(f"{path}.{key}: {e}")


def holding_from_dict(data: dict[str, Any], path: str = "holding") -> domain.Holding:
    data = _expect_dict(data, path)
    return domain.Holding(
        name=_name(data, path),
        invest_type=_enum(domain.InvestType, _require(data, "invest_type", path), f"{path}.invest_type"),
        amount=_amount(data, "amount", path),
        yearly_return=_amount(data, "yearly_return", path),
    )


def income_from_dict(data: dict[str, Any], path: str = "income") -> domain.IncomeRecord:
    data = _expect_dict(data, path)
    return domain.IncomeRecord(
        name=_name(data, path),
        category=_enum(domain.IncomeCategory, _require(data, "category", path), f"{path}.category"),
        frequency=_enum(domain.Frequency, _require(data, "frequency", path), f"{path}.frequency"),
        amount=_amount(data, "amount", path),
        annual_growth_rate=_amount(data, "annual_growth_rate", path, default=0.0),
        rental_type=_optional_enum(domain.RentalType, data, "rental_type", path),
        profession_type=_optional_enum(domain.ProfessionType, data, "profession_type", path),
        other_income_type=_optional_enum(domain.OtherIncomeType, data, "other_income_type", path),
        other_expense_deduction=_amount(data, "other_expense_deduction", path, default=0.0),
    )


def expense_from_dict(data: dict[str, Any], path: str = "expense") -> domain.ExpenseRecord:
    data = _expect_dict(data, path)
    return domain.ExpenseRecord(
        name=_name(data, path),
        expense_type=_enum(domain.ExpenseType, _require(data, "expense_type", path), f"{path}.expense_type"),
        frequency=_enum(domain.Frequency, _require(data, "frequency", path), f"{path}.frequency"),
        amount=_amount(data, "amount", path),
        annual_growth_rate=_amount(data, "annual_growth_rate", path, default=0.0),
        is_debt_payment=_flag(data, "is_debt_payment", path),
        is_non_mortgage_debt_payment=_flag(data, "is_non_mortgage_debt_payment", path),
        is_saving_payment=_flag(data, "is_saving_payment", path),
    )


def asset_from_dict(data: dict[str, Any], path: str = "asset") -> domain.AssetRecord:
    data = _expect_dict(data, path)
    return domain.AssetRecord(
        name=_name(data, path),
        asset_type=_enum(domain.AssetType, _require(data, "asset_type", path), f"{path}.asset_type"),
        amount=_amount(data, "amount", path),
        purchase_date=_optional_date(data, "purchase_date", path),
        invest_type=_optional_enum(domain.InvestType, data, "invest_type", path),
        invest_risk=_optional_enum(domain.InvestRisk, data, "invest_risk", path),
    )


def debt_from_dict(data: dict[str, Any], path: str = "debt") -> domain.DebtRecord:
    data = _expect_dict(data, path)
    return domain.DebtRecord(
        name=_name(data, path),
        debt_type=_enum(domain.DebtType, _require(data, "debt_type", path), f"{path}.debt_type"),
        term=_enum(domain.DebtTerm, _require(data, "term", path), f"{path}.term"),
        amount=_amount(data, "amount", path),
        annual_interest_rate=_amount(data, "annual_interest_rate", path, default=0.0),
        start_date=_optional_date(data, "start_date", path),
        duration_years=_count(data, "duration_years", path, default=0),
        principal=_amount(data, "principal", path, default=0.0),
    )


def goal_from_dict(data: dict[str, Any], path: str = "goal") -> domain.Goal:
    data = _expect_dict(data, path)
    horizon_years = _count(data, "horizon_years", path)
    if horizon_years < 1:
        raise ValidationError(f"{path}.horizon_years: must be at least 1")
    return domain.Goal(
        name=_name(data, path),
        target_value=_amount(data, "target_value", path),
        horizon_years=horizon_years,
    )


def general_goal_from_dict(data: dict[str, Any], path: str = "general_goal") -> domain.GeneralGoal:
    data = _expect_dict(data, path)
    return domain.GeneralGoal(
        name=_name(data, path),
        target_value=_amount(data, "target_value", path),
        horizon_years=_count(data, "horizon_years", path),
        net_annual_cashflow=_amount(data, "net_annual_cashflow", path, default=0.0),
        net_cashflow_growth_rate=_amount(data, "net_cashflow_growth_rate", path, default=0.0),
    )


def retirement_goal_from_dict(
    data: dict[str, Any], path: str = "retirement_goal"
) -> domain.RetirementGoal:
    data = _expect_dict(data, path)
    return domain.RetirementGoal(
        current_age=_count(data, "current_age", path),
        retirement_age=_count(data, "retirement_age", path),
        life_expectancy=_count(data, "life_expectancy", path),
        current_annual_expense=_amount(data, "current_annual_expense", path),
        expected_post_retirement_return=_amount(data, "expected_post_retirement_return", path),
        inflation_rate=_amount(data, "inflation_rate", path),
    )


def expense_portion_from_value(value: Any, path: str = "expense_portion") -> float:
    """Expense portion clamped into [0, 1]."""
    return min(_number(value, path), 1.0)


def tax_deduction_from_dict(
    data: dict[str, Any], path: str = "tax_deduction"
) -> domain.TaxDeduction:
    """Build a TaxDeduction; every field is optional and defaults to 0."""
    data = _expect_dict(data, path)
    status = data.get("marital_status") or domain.MaritalStatus.UNSPECIFIED.value
    counts = {"child", "child_2018", "adopted_child", "parental_care", "disabled_care"}
    values: dict[str, Any] = {}
    for f in fields(domain.TaxDeduction):
        if f.name == "marital_status":
            continue
        if f.name in counts:
            values[f.name] = _count(data, f.name, path, default=0)
        else:
            values[f.name] = _amount(data, f.name, path, default=0.0)
    return domain.TaxDeduction(
        marital_status=_enum(domain.MaritalStatus, status, f"{path}.marital_status"),
        **values,
    )


def tax_plan_from_dict(data: dict[str, Any], path: str = "tax_plan") -> domain.TaxPlan:
    data = _expect_dict(data, path)
    return domain.TaxPlan(
        **{f.name: _amount(data, f.name, path, default=0.0) for f in fields(domain.TaxPlan)}
    )


LIST_PARSERS: dict[domain.RecordKey, Callable[[dict[str, Any], str], Any]] = {
    domain.RecordKey.INCOMES: income_from_dict,
    domain.RecordKey.EXPENSES: expense_from_dict,
    domain.RecordKey.ASSETS: asset_from_dict,
    domain.RecordKey.DEBTS: debt_from_dict,
    domain.RecordKey.HOLDINGS: holding_from_dict,
    domain.RecordKey.GOALS: goal_from_dict,
}

VALUE_PARSERS: dict[domain.RecordKey, Callable[..., Any]] = {
    domain.RecordKey.GENERAL_GOAL: general_goal_from_dict,
    domain.RecordKey.RETIREMENT_GOAL: retirement_goal_from_dict,
    domain.RecordKey.EXPENSE_PORTION: expense_portion_from_value,
    domain.RecordKey.TAX_DEDUCTION: tax_deduction_from_dict,
    domain.RecordKey.TAX_PLAN: tax_plan_from_dict,
}


def records_from_value(key: domain.RecordKey, value: Any) -> list[Any]:
    """Convert a stored list into entities; None reads as an empty list."""
    if value is None:
        return []
    items = _expect_list(value, key.value)
    parser = LIST_PARSERS[key]
    return [parser(item, f"{key.value}[{index}]") for index, item in enumerate(items)]


def entity_from_value(key: domain.RecordKey, value: Any) -> Optional[Any]:
    """Convert a stored single value into its entity; None stays None."""
    if value is None:
        return None
    return VALUE_PARSERS[key](value, key.value)


def _to_json(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert any record entity to its stored JSON object."""
    if not is_dataclass(record):
        raise TypeError(f"Expected a record entity, got {type(record).__name__}")
    return {f.name: _to_json(getattr(record, f.name)) for f in fields(record)}
