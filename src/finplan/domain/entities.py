"""Domain model entities for finplan.

These are pure data classes representing planning records and calculation
results, independent of how the record store serializes them. Records are
frozen so the calculation functions can never mutate a caller's snapshot.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Frequency(str, Enum):
    """How often an income or expense amount recurs."""

    MONTHLY = "monthly"
    ANNUAL = "annual"
    LUMP_SUM = "lump_sum"


class InvestType(str, Enum):
    """Investment class of a portfolio holding or investment asset."""

    THAI_EQUITY = "thai_equity"
    FOREIGN_EQUITY = "foreign_equity"
    BOND = "bond"
    DEBENTURE = "debenture"
    GOLD = "gold"
    DEPOSIT = "deposit"
    OTHER = "other"


class InvestRisk(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IncomeCategory(str, Enum):
    """Statutory assessable income categories, section 40(1) to 40(8)."""

    EMPLOYMENT = "employment"
    SERVICE_CONTRACT = "service_contract"
    ROYALTY = "royalty"
    INTEREST_DIVIDEND = "interest_dividend"
    RENTAL = "rental"
    INDEPENDENT_PROFESSION = "independent_profession"
    CONSTRUCTION_CONTRACT = "construction_contract"
    OTHER = "other"


class RentalType(str, Enum):
    """Kind of property producing 40(5) rental income."""

    BUILDING_OR_VEHICLE = "building_or_vehicle"
    AGRICULTURAL_LAND = "agricultural_land"
    NON_AGRICULTURAL_LAND = "non_agricultural_land"
    OTHER_PROPERTY = "other_property"


class ProfessionType(str, Enum):
    """Kind of 40(6) independent profession."""

    MEDICAL = "medical"
    OTHER_PROFESSION = "other_profession"


class OtherIncomeType(str, Enum):
    """Subtypes of 40(8) other income."""

    LISTED_FIRST_300K = "listed_first_300k"
    LISTED_OVER_300K = "listed_over_300k"
    LISTED_2_TO_43 = "listed_2_to_43"
    UNLISTED = "unlisted"


class ExpenseType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"
    SAVING = "saving"
    OTHER = "other"


class AssetType(str, Enum):
    LIQUID = "liquid"
    PERSONAL = "personal"
    INVESTMENT = "investment"
    OTHER = "other"


class DebtType(str, Enum):
    MORTGAGE = "mortgage"
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    CREDIT_CARD = "credit_card"
    CASH_CARD = "cash_card"
    INSTALLMENT = "installment"
    INFORMAL = "informal"
    OTHER = "other"


class DebtTerm(str, Enum):
    SHORT_TERM = "short_term"
    LONG_TERM = "long_term"


class MaritalStatus(str, Enum):
    """Filing situation driving the personal allowance."""

    SINGLE = "single"
    SPOUSE_SEPARATE_FILING = "spouse_separate_filing"
    SPOUSE_JOINT_FILING = "spouse_joint_filing"
    SPOUSE_NO_INCOME = "spouse_no_income"
    UNSPECIFIED = "unspecified"


class RecordKey(str, Enum):
    """Keys under which a client's records live in the record store."""

    INCOMES = "incomes"
    EXPENSES = "expenses"
    ASSETS = "assets"
    DEBTS = "debts"
    HOLDINGS = "holdings"
    GOALS = "goals"
    GENERAL_GOAL = "general_goal"
    RETIREMENT_GOAL = "retirement_goal"
    EXPENSE_PORTION = "expense_portion"
    TAX_DEDUCTION = "tax_deduction"
    TAX_PLAN = "tax_plan"

    @property
    def holds_list(self) -> bool:
        """True for keys holding a list of records unique by name."""
        return self in LIST_RECORD_KEYS


class RatioStatus(str, Enum):
    """Display status of a financial health ratio."""

    PASS = "pass"
    FAIL = "fail"
    INDETERMINATE = "indeterminate"


LIST_RECORD_KEYS = frozenset(
    {
        RecordKey.INCOMES,
        RecordKey.EXPENSES,
        RecordKey.ASSETS,
        RecordKey.DEBTS,
        RecordKey.HOLDINGS,
        RecordKey.GOALS,
    }
)


# Records


@dataclass(frozen=True)
class Holding:
    """Investment holding in the client's selected portfolio."""

    name: str
    invest_type: InvestType
    amount: float
    yearly_return: float


@dataclass(frozen=True)
class IncomeRecord:
    """Income record.

    Only one of the subtype fields is meaningful, matching ``category``:
    ``rental_type`` for RENTAL, ``profession_type`` for INDEPENDENT_PROFESSION
    and ``other_income_type`` for OTHER. ``other_expense_deduction`` is the
    actual-expense claim of an UNLISTED other income.
    """

    name: str
    category: IncomeCategory
    frequency: Frequency
    amount: float
    annual_growth_rate: float = 0.0
    rental_type: Optional[RentalType] = None
    profession_type: Optional[ProfessionType] = None
    other_income_type: Optional[OtherIncomeType] = None
    other_expense_deduction: float = 0.0


@dataclass(frozen=True)
class ExpenseRecord:
    """Expense record."""

    name: str
    expense_type: ExpenseType
    frequency: Frequency
    amount: float
    annual_growth_rate: float = 0.0
    is_debt_payment: bool = False
    is_non_mortgage_debt_payment: bool = False
    is_saving_payment: bool = False


@dataclass(frozen=True)
class AssetRecord:
    """Asset record."""

    name: str
    asset_type: AssetType
    amount: float
    purchase_date: Optional[date] = None
    invest_type: Optional[InvestType] = None
    invest_risk: Optional[InvestRisk] = None


@dataclass(frozen=True)
class DebtRecord:
    """Debt record."""

    name: str
    debt_type: DebtType
    term: DebtTerm
    amount: float
    annual_interest_rate: float = 0.0
    start_date: Optional[date] = None
    duration_years: int = 0
    principal: float = 0.0


@dataclass(frozen=True)
class Goal:
    """Cash-flow savings goal, unique by name per client."""

    name: str
    target_value: float
    horizon_years: int


@dataclass(frozen=True)
class GeneralGoal:
    """Single lump-sum goal funded from the portfolio and net cash flow."""

    name: str
    target_value: float
    horizon_years: int
    net_annual_cashflow: float
    net_cashflow_growth_rate: float


@dataclass(frozen=True)
class RetirementGoal:
    current_age: int
    retirement_age: int
    life_expectancy: int
    current_annual_expense: float
    expected_post_retirement_return: float
    inflation_rate: float


@dataclass(frozen=True)
class TaxDeduction:
    """Itemized deduction inputs as declared by the client.

    Counts are numbers of people; all other fields are amounts paid during
    the tax year, before any statutory cap.
    """

    marital_status: MaritalStatus = MaritalStatus.UNSPECIFIED
    child: int = 0
    child_2018: int = 0
    adopted_child: int = 0
    parental_care: int = 0
    disabled_care: int = 0
    prenatal_care: float = 0.0
    parent_health_insurance: float = 0.0
    life_insurance: float = 0.0
    health_insurance: float = 0.0
    pension_insurance: float = 0.0
    spouse_no_income_life_insurance: float = 0.0
    rmf: float = 0.0
    ssf: float = 0.0
    gov_pension_fund: float = 0.0
    pvd: float = 0.0
    national_savings_fund: float = 0.0
    social_security_premium: float = 0.0
    social_enterprise: float = 0.0
    thai_esg: float = 0.0
    general_donation: float = 0.0
    education_donation: float = 0.0
    political_donation: float = 0.0


@dataclass(frozen=True)
class TaxPlan:
    """Hypothetical additional retirement-fund contributions."""

    rmf: float = 0.0
    ssf: float = 0.0
    gov_pension_fund: float = 0.0
    pvd: float = 0.0
    national_savings_fund: float = 0.0
    pension_insurance: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.rmf
            + self.ssf
            + self.gov_pension_fund
            + self.pvd
            + self.national_savings_fund
            + self.pension_insurance
        )


@dataclass(frozen=True)
class ClientSnapshot:
    """Every record of one client, as read from the record store."""

    incomes: tuple[IncomeRecord, ...] = ()
    expenses: tuple[ExpenseRecord, ...] = ()
    assets: tuple[AssetRecord, ...] = ()
    debts: tuple[DebtRecord, ...] = ()
    holdings: tuple[Holding, ...] = ()
    goals: tuple[Goal, ...] = ()
    general_goal: Optional[GeneralGoal] = None
    retirement_goal: Optional[RetirementGoal] = None
    expense_portion: float = 1.0
    tax_deduction: Optional[TaxDeduction] = None
    tax_plan: Optional[TaxPlan] = None


# Results


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: float
    weighted_return: float


@dataclass(frozen=True)
class ProjectedAmount:
    """Amount attributed to one named record for one projection year."""

    name: str
    amount: float


@dataclass(frozen=True)
class CashflowYear:
    """One row of the multi-year cash-flow table."""

    year: int
    income_details: tuple[ProjectedAmount, ...]
    expense_details: tuple[ProjectedAmount, ...]
    goal_payments: tuple[ProjectedAmount, ...]
    total_income: float
    total_expense: float
    total_goal_payments: float
    net_income: float
    net_income_after_goals: float


@dataclass(frozen=True)
class CashflowTable:
    portfolio_return: float
    saving_growth_rate: float
    years: tuple[CashflowYear, ...] = ()

    @property
    def is_sufficient(self) -> bool:
        """True when every year still has a non-negative balance after goals."""
        return all(row.net_income_after_goals >= 0 for row in self.years)


@dataclass(frozen=True)
class GeneralGoalResult:
    future_value_of_current_investment: float
    remaining_goal_value: float
    annual_saving: float

    @property
    def is_sufficient(self) -> bool:
        return self.annual_saving <= 0


@dataclass(frozen=True)
class RetirementGoalResult:
    years_to_retirement: int
    future_expense_at_retirement: float
    real_discount_rate: float
    adjusted_future_expense: float
    retirement_duration: int
    capital_required: float


@dataclass(frozen=True)
class FinancialAggregates:
    """Totals the ratio engine works from, all annual unless named otherwise."""

    total_liquid_assets: float = 0.0
    total_income: float = 0.0
    total_expense: float = 0.0
    monthly_expense: float = 0.0
    net_income: float = 0.0
    savings: float = 0.0
    total_short_term_debt: float = 0.0
    total_debt: float = 0.0
    total_asset: float = 0.0
    total_invest_asset: float = 0.0
    total_debt_expense: float = 0.0
    total_non_mortgage_debt_expense: float = 0.0
    net_worth: float = 0.0
    total_asset_income: float = 0.0


@dataclass(frozen=True)
class FinancialRatios:
    liquidity: float
    basic_liquidity: float
    liquidity_to_net_worth: float
    debt_to_asset: float
    repay_all_debts: float
    debt_service_to_income: float
    non_mortgage_debt_service_to_income: float
    saving_ratio: float
    invest_ratio: float
    net_worth_ratio: float
    survival_ratio: float
    wealth_ratio: float


@dataclass(frozen=True)
class ExpenseDeductions:
    """Statutory expense deductions by income category."""

    employment_and_service: float = 0.0
    royalty: float = 0.0
    interest_dividend: float = 0.0
    rental: float = 0.0
    independent_profession: float = 0.0
    construction_contract: float = 0.0
    deduction_408_under_300: float = 0.0
    deduction_408_over_300: float = 0.0
    combined_408_listed_first: float = 0.0
    deduction_408_listed_2_to_43: float = 0.0
    deduction_408_unlisted: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.employment_and_service
            + self.royalty
            + self.interest_dividend
            + self.rental
            + self.independent_profession
            + self.construction_contract
            + self.combined_408_listed_first
            + self.deduction_408_listed_2_to_43
            + self.deduction_408_unlisted
        )


@dataclass(frozen=True)
class ItemizedDeductions:
    """Allowable itemized deductions after every individual and group cap."""

    marital_status: float = 0.0
    child: float = 0.0
    child_2018: float = 0.0
    adopted_child: float = 0.0
    parental_care: float = 0.0
    disabled_care: float = 0.0
    prenatal_care: float = 0.0
    parent_health_insurance: float = 0.0
    life_insurance: float = 0.0
    health_insurance: float = 0.0
    pension_insurance_portion: float = 0.0
    pension_insurance: float = 0.0
    spouse_no_income_life_insurance: float = 0.0
    rmf: float = 0.0
    ssf: float = 0.0
    gov_pension_fund: float = 0.0
    pvd: float = 0.0
    national_savings_fund: float = 0.0
    retirement_group: float = 0.0
    social_security_premium: float = 0.0
    social_enterprise: float = 0.0
    thai_esg: float = 0.0
    before_donation: float = 0.0
    base_for_donation: float = 0.0
    general_donation: float = 0.0
    education_donation: float = 0.0
    political_donation: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.before_donation
            + self.general_donation
            + self.education_donation
            + self.political_donation
        )


@dataclass(frozen=True)
class TaxResult:
    total_income: float
    expense_deductions: ExpenseDeductions
    itemized_deductions: ItemizedDeductions
    income_after_deductions: float
    method1_tax: float
    method2_tax: float
    tax_to_pay: float

    @property
    def total_expense_deductions(self) -> float:
        return self.expense_deductions.total

    @property
    def total_itemized_deductions(self) -> float:
        return self.itemized_deductions.total


@dataclass(frozen=True)
class RetirementFundLimits:
    """Per-fund amounts for the retirement-fund deduction group."""

    rmf: float = 0.0
    ssf: float = 0.0
    gov_pension_fund: float = 0.0
    pvd: float = 0.0
    national_savings_fund: float = 0.0
    pension_insurance: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class RetirementFundRoom:
    maximum: RetirementFundLimits
    used: RetirementFundLimits
    remaining: RetirementFundLimits


@dataclass(frozen=True)
class TaxPlanResult:
    baseline: TaxResult
    planned: TaxResult
    plan: TaxPlan
    room: RetirementFundRoom

    @property
    def tax_saved(self) -> float:
        return self.baseline.tax_to_pay - self.planned.tax_to_pay
