"""Personal income tax estimation.

The pipeline runs in one pass per call:

1. annualize incomes (monthly amounts x12),
2. statutory expense deductions per income category,
3. itemized allowances with their individual and group caps,
4. progressive bracket tax on the net income (method 1),
5. 0.5% of non-salary income above 1,000,000 (method 2),
6. the larger of the two.

A what-if run replaces the retirement-fund group figure with a hypothetical
one, which is how the retirement-fund planner measures the tax saved.
"""

from dataclasses import replace
from typing import Iterable, Optional

from finplan.domain.entities import (
    ExpenseDeductions,
    Frequency,
    IncomeCategory,
    IncomeRecord,
    ItemizedDeductions,
    MaritalStatus,
    OtherIncomeType,
    ProfessionType,
    RentalType,
    RetirementFundLimits,
    RetirementFundRoom,
    TaxDeduction,
    TaxPlan,
    TaxPlanResult,
    TaxResult,
)
from finplan.domain.money import clamp_non_negative

# Expense deduction rates and caps
SALARY_DEDUCTION_RATE = 0.5
SALARY_DEDUCTION_CAP = 100_000
ROYALTY_DEDUCTION_RATE = 0.5
ROYALTY_DEDUCTION_CAP = 100_000
CONSTRUCTION_DEDUCTION_RATE = 0.6

RENTAL_DEDUCTION_RATES: dict[RentalType, float] = {
    RentalType.BUILDING_OR_VEHICLE: 0.30,
    RentalType.AGRICULTURAL_LAND: 0.20,
    RentalType.NON_AGRICULTURAL_LAND: 0.15,
    RentalType.OTHER_PROPERTY: 0.10,
}

PROFESSION_DEDUCTION_RATES: dict[ProfessionType, float] = {
    ProfessionType.MEDICAL: 0.60,
    ProfessionType.OTHER_PROFESSION: 0.30,
}

OTHER_INCOME_DEDUCTION_RATES: dict[OtherIncomeType, float] = {
    OtherIncomeType.LISTED_FIRST_300K: 0.60,
    OtherIncomeType.LISTED_OVER_300K: 0.40,
    OtherIncomeType.LISTED_2_TO_43: 0.60,
}
LISTED_FIRST_INCOME_DEDUCTION_CAP = 600_000

# Itemized allowances
PERSONAL_ALLOWANCE: dict[MaritalStatus, float] = {
    MaritalStatus.SINGLE: 60_000,
    MaritalStatus.SPOUSE_SEPARATE_FILING: 60_000,
    MaritalStatus.SPOUSE_JOINT_FILING: 120_000,
    MaritalStatus.SPOUSE_NO_INCOME: 120_000,
}
CHILD_ALLOWANCE = 30_000
CHILD_2018_ALLOWANCE = 60_000
MAX_LEGAL_CHILDREN = 3
PARENTAL_CARE_ALLOWANCE = 30_000
DISABLED_CARE_ALLOWANCE = 60_000
PRENATAL_CARE_CAP = 60_000
PARENT_HEALTH_INSURANCE_CAP = 15_000
LIFE_INSURANCE_CAP = 100_000
HEALTH_INSURANCE_CAP = 25_000
LIFE_AND_HEALTH_INSURANCE_CAP = 100_000
SPOUSE_LIFE_INSURANCE_CAP = 10_000
SOCIAL_SECURITY_CAP = 9_000
SOCIAL_ENTERPRISE_CAP = 100_000
THAI_ESG_RATE, THAI_ESG_CAP = 0.30, 300_000

# Retirement-fund group: (share of income, absolute cap) per fund
PENSION_INSURANCE_RATE, PENSION_INSURANCE_CAP = 0.15, 200_000
RMF_RATE, RMF_CAP = 0.30, 500_000
SSF_RATE, SSF_CAP = 0.30, 200_000
GOV_PENSION_FUND_RATE, GOV_PENSION_FUND_CAP = 0.30, 500_000
PVD_RATE, PVD_CAP = 0.15, 500_000
NATIONAL_SAVINGS_FUND_CAP = 30_000
RETIREMENT_GROUP_CAP = 500_000

DONATION_BASE_RATE = 0.10
EDUCATION_DONATION_MULTIPLIER = 2
POLITICAL_DONATION_CAP = 10_000

# (bracket floor, cumulative tax at the floor, marginal rate)
TAX_BRACKETS: tuple[tuple[float, float, float], ...] = (
    (5_000_000, 1_265_000, 0.35),
    (2_000_000, 365_000, 0.30),
    (1_000_000, 115_000, 0.25),
    (750_000, 65_000, 0.20),
    (500_000, 27_500, 0.15),
    (300_000, 7_500, 0.10),
    (150_000, 0, 0.05),
)

MINIMUM_TAX_THRESHOLD = 1_000_000
MINIMUM_TAX_RATE = 0.005


def annual_income_amount(income: IncomeRecord) -> float:
    """Income amount for the tax year; only monthly amounts are scaled."""
    if income.frequency == Frequency.MONTHLY:
        return income.amount * 12
    return income.amount


def _income_deduction(income: IncomeRecord, amount: float) -> float:
    """Deduction of a single income outside the pooled categories."""
    if income.category == IncomeCategory.ROYALTY:
        return min(amount * ROYALTY_DEDUCTION_RATE, ROYALTY_DEDUCTION_CAP)
    if income.category == IncomeCategory.RENTAL:
        return amount * RENTAL_DEDUCTION_RATES.get(income.rental_type, 0.0)
    if income.category == IncomeCategory.INDEPENDENT_PROFESSION:
        return amount * PROFESSION_DEDUCTION_RATES.get(income.profession_type, 0.0)
    if income.category == IncomeCategory.CONSTRUCTION_CONTRACT:
        return amount * CONSTRUCTION_DEDUCTION_RATE
    return 0.0


def calculate_expense_deductions(incomes: Iterable[IncomeRecord]) -> ExpenseDeductions:
    """Statutory expense deductions for each income category.

    Employment and service-contract income are pooled before the 50% /
    100,000 cap. The two "first 300,000" and "over 300,000" slices of other
    income share a 600,000 cap; listed activities (2) to (43) take a flat
    60%; unlisted other income deducts the client's actual expense claim.
    """
    salary_pool = 0.0
    per_category: dict[IncomeCategory, float] = {}
    other_first_300k = 0.0
    other_over_300k = 0.0
    listed_2_to_43 = 0.0
    unlisted = 0.0

    for income in incomes:
        amount = annual_income_amount(income)
        if income.category in (IncomeCategory.EMPLOYMENT, IncomeCategory.SERVICE_CONTRACT):
            salary_pool += amount
        elif income.category == IncomeCategory.OTHER:
            subtype = income.other_income_type
            if subtype == OtherIncomeType.LISTED_FIRST_300K:
                other_first_300k += amount
            elif subtype == OtherIncomeType.LISTED_OVER_300K:
                other_over_300k += amount
            elif subtype == OtherIncomeType.LISTED_2_TO_43:
                listed_2_to_43 += amount * OTHER_INCOME_DEDUCTION_RATES[subtype]
            elif subtype == OtherIncomeType.UNLISTED:
                unlisted += clamp_non_negative(income.other_expense_deduction)
        else:
            per_category[income.category] = per_category.get(
                income.category, 0.0
            ) + _income_deduction(income, amount)

    salary_deduction = 0.0
    if salary_pool > 0:
        salary_deduction = min(salary_pool * SALARY_DEDUCTION_RATE, SALARY_DEDUCTION_CAP)

    under_300 = other_first_300k * OTHER_INCOME_DEDUCTION_RATES[OtherIncomeType.LISTED_FIRST_300K]
    over_300 = other_over_300k * OTHER_INCOME_DEDUCTION_RATES[OtherIncomeType.LISTED_OVER_300K]

    return ExpenseDeductions(
        employment_and_service=salary_deduction,
        royalty=per_category.get(IncomeCategory.ROYALTY, 0.0),
        interest_dividend=per_category.get(IncomeCategory.INTEREST_DIVIDEND, 0.0),
        rental=per_category.get(IncomeCategory.RENTAL, 0.0),
        independent_profession=per_category.get(IncomeCategory.INDEPENDENT_PROFESSION, 0.0),
        construction_contract=per_category.get(IncomeCategory.CONSTRUCTION_CONTRACT, 0.0),
        deduction_408_under_300=under_300,
        deduction_408_over_300=over_300,
        combined_408_listed_first=min(under_300 + over_300, LISTED_FIRST_INCOME_DEDUCTION_CAP),
        deduction_408_listed_2_to_43=listed_2_to_43,
        deduction_408_unlisted=unlisted,
    )


def _life_and_health_insurance(deduction: TaxDeduction) -> tuple[float, float]:
    """Allowable life and health premiums; health gives way first."""
    life = min(clamp_non_negative(deduction.life_insurance), LIFE_INSURANCE_CAP)
    health = min(clamp_non_negative(deduction.health_insurance), HEALTH_INSURANCE_CAP)
    if life + health > LIFE_AND_HEALTH_INSURANCE_CAP:
        health = max(0.0, health - (life + health - LIFE_AND_HEALTH_INSURANCE_CAP))
    return life, health


def _pension_insurance_split(
    deduction: TaxDeduction, total_income: float
) -> tuple[float, float]:
    """Split the pension-insurance premium into (life bucket, pension group).

    The premium first fills whatever is left of the 100,000 life and health
    bucket; only the remainder counts toward the retirement-fund group.
    """
    life, health = _life_and_health_insurance(deduction)
    premium = clamp_non_negative(deduction.pension_insurance)
    portion = 0.0
    if life + health < LIFE_AND_HEALTH_INSURANCE_CAP:
        portion = min(premium, LIFE_AND_HEALTH_INSURANCE_CAP - (life + health))
    remainder = min(
        premium - portion,
        PENSION_INSURANCE_RATE * total_income,
        PENSION_INSURANCE_CAP,
    )
    return portion, remainder


def calculate_itemized_deductions(
    deduction: Optional[TaxDeduction],
    total_income: float,
    total_expense_deductions: float,
    plan_total: Optional[float] = None,
) -> ItemizedDeductions:
    """Apply every itemized allowance with its cap.

    Args:
        deduction: Declared deductions, or None when the client has none
        total_income: Annual assessable income
        total_expense_deductions: Statutory expense deductions, used for the
            donation base
        plan_total: Hypothetical retirement-fund group figure replacing the
            computed one (still subject to the group cap)

    Returns:
        ItemizedDeductions breakdown; all zeros when ``deduction`` is None,
        with or without a plan
    """
    if deduction is None:
        return ItemizedDeductions()

    joint = deduction.marital_status == MaritalStatus.SPOUSE_JOINT_FILING
    multiplier = 2 if joint else 1
    child = int(clamp_non_negative(deduction.child))
    child_2018 = int(clamp_non_negative(deduction.child_2018))
    adopted = int(clamp_non_negative(deduction.adopted_child))

    child_amount = child * CHILD_ALLOWANCE * multiplier
    child_2018_amount = child_2018 * CHILD_2018_ALLOWANCE * multiplier if child > 0 else 0
    legal_children = child + child_2018
    adopted_amount = 0
    if legal_children < MAX_LEGAL_CHILDREN:
        adopted_amount = (
            min(adopted, MAX_LEGAL_CHILDREN - legal_children) * CHILD_ALLOWANCE * multiplier
        )

    life, health = _life_and_health_insurance(deduction)
    pension_portion, pension_remainder = _pension_insurance_split(deduction, total_income)

    rmf = min(clamp_non_negative(deduction.rmf), RMF_RATE * total_income, RMF_CAP)
    ssf = min(clamp_non_negative(deduction.ssf), SSF_RATE * total_income, SSF_CAP)
    gov_pension = min(
        clamp_non_negative(deduction.gov_pension_fund),
        GOV_PENSION_FUND_RATE * total_income,
        GOV_PENSION_FUND_CAP,
    )
    pvd = min(clamp_non_negative(deduction.pvd), PVD_RATE * total_income, PVD_CAP)
    nsf = min(clamp_non_negative(deduction.national_savings_fund), NATIONAL_SAVINGS_FUND_CAP)

    if plan_total is None:
        group = min(rmf + ssf + gov_pension + pvd + nsf + pension_remainder, RETIREMENT_GROUP_CAP)
    else:
        group = min(clamp_non_negative(plan_total), RETIREMENT_GROUP_CAP)

    partial = ItemizedDeductions(
        marital_status=PERSONAL_ALLOWANCE.get(deduction.marital_status, 0.0),
        child=child_amount,
        child_2018=child_2018_amount,
        adopted_child=adopted_amount,
        parental_care=clamp_non_negative(deduction.parental_care) * PARENTAL_CARE_ALLOWANCE,
        disabled_care=clamp_non_negative(deduction.disabled_care) * DISABLED_CARE_ALLOWANCE,
        prenatal_care=min(clamp_non_negative(deduction.prenatal_care), PRENATAL_CARE_CAP),
        parent_health_insurance=min(
            clamp_non_negative(deduction.parent_health_insurance), PARENT_HEALTH_INSURANCE_CAP
        ),
        life_insurance=life,
        health_insurance=health,
        pension_insurance_portion=pension_portion,
        pension_insurance=pension_remainder,
        spouse_no_income_life_insurance=min(
            clamp_non_negative(deduction.spouse_no_income_life_insurance),
            SPOUSE_LIFE_INSURANCE_CAP,
        ),
        rmf=rmf,
        ssf=ssf,
        gov_pension_fund=gov_pension,
        pvd=pvd,
        national_savings_fund=nsf,
        retirement_group=group,
        social_security_premium=min(
            clamp_non_negative(deduction.social_security_premium), SOCIAL_SECURITY_CAP
        ),
        social_enterprise=min(
            clamp_non_negative(deduction.social_enterprise), SOCIAL_ENTERPRISE_CAP
        ),
        thai_esg=min(
            clamp_non_negative(deduction.thai_esg), THAI_ESG_RATE * total_income, THAI_ESG_CAP
        ),
    )

    before_donation = (
        partial.marital_status
        + partial.child
        + partial.child_2018
        + partial.adopted_child
        + partial.parental_care
        + partial.disabled_care
        + partial.prenatal_care
        + partial.parent_health_insurance
        + partial.life_insurance
        + partial.pension_insurance_portion
        + partial.health_insurance
        + partial.retirement_group
        + partial.spouse_no_income_life_insurance
        + partial.social_security_premium
        + partial.social_enterprise
        + partial.thai_esg
    )
    base = max(0.0, total_income - total_expense_deductions - before_donation)
    donation_cap = base * DONATION_BASE_RATE

    return replace(
        partial,
        before_donation=before_donation,
        base_for_donation=base,
        general_donation=min(clamp_non_negative(deduction.general_donation), donation_cap),
        education_donation=min(
            clamp_non_negative(deduction.education_donation) * EDUCATION_DONATION_MULTIPLIER,
            donation_cap,
        ),
        political_donation=min(
            clamp_non_negative(deduction.political_donation), POLITICAL_DONATION_CAP
        ),
    )


def calculate_method1_tax(net_income: float) -> float:
    """Progressive bracket tax on net taxable income.

    Each bracket adds its marginal rate on the slice above its floor to the
    cumulative tax already owed at that floor.
    """
    for floor, base_tax, rate in TAX_BRACKETS:
        if net_income > floor:
            return base_tax + (net_income - floor) * rate
    return 0.0


def calculate_method2_tax(incomes: Iterable[IncomeRecord], total_income: float) -> float:
    """Minimum tax of 0.5% on non-salary income above 1,000,000, else 0."""
    salary = sum(
        annual_income_amount(income)
        for income in incomes
        if income.category == IncomeCategory.EMPLOYMENT
    )
    non_salary = total_income - salary
    if non_salary > MINIMUM_TAX_THRESHOLD:
        return non_salary * MINIMUM_TAX_RATE
    return 0.0


def calculate_tax(
    incomes: Iterable[IncomeRecord],
    deduction: Optional[TaxDeduction] = None,
    plan_total: Optional[float] = None,
) -> TaxResult:
    """Estimate the tax payable for the year.

    Args:
        incomes: Income records
        deduction: Declared itemized deductions, if any
        plan_total: Hypothetical retirement-fund group figure for a what-if run

    Returns:
        TaxResult
    """
    incomes = list(incomes)
    total_income = sum(annual_income_amount(income) for income in incomes)

    expense_deductions = calculate_expense_deductions(incomes)
    itemized = calculate_itemized_deductions(
        deduction, total_income, expense_deductions.total, plan_total
    )

    income_after_deductions = max(0.0, total_income - expense_deductions.total - itemized.total)
    method1 = calculate_method1_tax(income_after_deductions)
    method2 = calculate_method2_tax(incomes, total_income)

    tax_to_pay = method1
    if method2 > 0 and method2 > method1:
        tax_to_pay = method2

    return TaxResult(
        total_income=total_income,
        expense_deductions=expense_deductions,
        itemized_deductions=itemized,
        income_after_deductions=income_after_deductions,
        method1_tax=method1,
        method2_tax=method2,
        tax_to_pay=tax_to_pay,
    )


def _sum_limits(**amounts: float) -> RetirementFundLimits:
    return RetirementFundLimits(**amounts, total=sum(amounts.values()))


def calculate_retirement_fund_room(
    deduction: Optional[TaxDeduction], total_income: float
) -> RetirementFundRoom:
    """Maximum, already used and remaining allowance per retirement fund.

    Args:
        deduction: Declared deductions, or None
        total_income: Annual assessable income

    Returns:
        RetirementFundRoom; the maximum and remaining totals never exceed the
        500,000 group cap
    """
    maximum = _sum_limits(
        rmf=min(RMF_RATE * total_income, RMF_CAP),
        ssf=min(SSF_RATE * total_income, SSF_CAP),
        gov_pension_fund=min(GOV_PENSION_FUND_RATE * total_income, GOV_PENSION_FUND_CAP),
        pvd=min(PVD_RATE * total_income, PVD_CAP),
        national_savings_fund=NATIONAL_SAVINGS_FUND_CAP,
        pension_insurance=min(PENSION_INSURANCE_RATE * total_income, PENSION_INSURANCE_CAP),
    )
    maximum = replace(maximum, total=min(maximum.total, RETIREMENT_GROUP_CAP))

    if deduction is None:
        used = RetirementFundLimits()
    else:
        itemized = calculate_itemized_deductions(deduction, total_income, 0.0)
        used = _sum_limits(
            rmf=itemized.rmf,
            ssf=itemized.ssf,
            gov_pension_fund=itemized.gov_pension_fund,
            pvd=itemized.pvd,
            national_savings_fund=itemized.national_savings_fund,
            pension_insurance=itemized.pension_insurance,
        )

    remaining = RetirementFundLimits(
        rmf=max(maximum.rmf - used.rmf, 0.0),
        ssf=max(maximum.ssf - used.ssf, 0.0),
        gov_pension_fund=max(maximum.gov_pension_fund - used.gov_pension_fund, 0.0),
        pvd=max(maximum.pvd - used.pvd, 0.0),
        national_savings_fund=max(
            maximum.national_savings_fund - used.national_savings_fund, 0.0
        ),
        pension_insurance=max(maximum.pension_insurance - used.pension_insurance, 0.0),
        total=min(RETIREMENT_GROUP_CAP, max(maximum.total - used.total, 0.0)),
    )
    return RetirementFundRoom(maximum=maximum, used=used, remaining=remaining)


def cap_tax_plan(plan: TaxPlan, room: RetirementFundRoom) -> TaxPlan:
    """Clamp each hypothetical contribution to the room left in its fund."""
    remaining = room.remaining
    return TaxPlan(
        rmf=min(clamp_non_negative(plan.rmf), remaining.rmf),
        ssf=min(clamp_non_negative(plan.ssf), remaining.ssf),
        gov_pension_fund=min(clamp_non_negative(plan.gov_pension_fund), remaining.gov_pension_fund),
        pvd=min(clamp_non_negative(plan.pvd), remaining.pvd),
        national_savings_fund=min(
            clamp_non_negative(plan.national_savings_fund), remaining.national_savings_fund
        ),
        pension_insurance=min(
            clamp_non_negative(plan.pension_insurance), remaining.pension_insurance
        ),
    )


def calculate_tax_plan(
    incomes: Iterable[IncomeRecord],
    deduction: Optional[TaxDeduction],
    plan: TaxPlan,
) -> TaxPlanResult:
    """Compare the baseline tax with the tax after extra retirement savings.

    Args:
        incomes: Income records
        deduction: Declared deductions, or None
        plan: Hypothetical extra contributions; each is capped to its
            remaining room before use

    Returns:
        TaxPlanResult with both runs, the capped plan and the fund room
    """
    incomes = list(incomes)
    baseline = calculate_tax(incomes, deduction)
    room = calculate_retirement_fund_room(deduction, baseline.total_income)
    capped_plan = cap_tax_plan(plan, room)
    plan_total = min(room.used.total + capped_plan.total, RETIREMENT_GROUP_CAP)
    planned = calculate_tax(incomes, deduction, plan_total=plan_total)
    return TaxPlanResult(baseline=baseline, planned=planned, plan=capped_plan, room=room)
