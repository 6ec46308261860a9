"""Tests for finproj.financial.calculators.tax_adjustment."""

import pytest

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.tax_adjustment import apply_tax, compare_accounts
from finproj.financial.calculators.tax_tables import ACCOUNT_PROFILES_FR_2024, get_account_profile
from finproj.financial.models import AccountKind

LIVRET_A = get_account_profile(AccountKind.LIVRET_A)
PEA = get_account_profile(AccountKind.PEA)
PEL = get_account_profile(AccountKind.PEL)
ASSURANCE_VIE = get_account_profile(AccountKind.ASSURANCE_VIE)
STANDARD = get_account_profile(AccountKind.STANDARD)


@pytest.mark.smoke
class TestApplyTax:
    def test_livret_a_keeps_everything(self):
        result = apply_tax(1_000, LIVRET_A, 5)
        assert result.taxes == 0
        assert result.social_charges == 0
        assert result.net_interest == 1_000
        assert result.effective_rate == 1.0

    def test_pea_before_five_years(self):
        result = apply_tax(1_000, PEA, 3)
        assert result.taxes == pytest.approx(225)
        assert result.social_charges == pytest.approx(172)
        assert result.net_interest == pytest.approx(603)
        assert result.effective_rate == pytest.approx(0.603)

    def test_pea_after_five_years(self):
        result = apply_tax(1_000, PEA, 5)
        assert result.taxes == 0
        assert result.net_interest == pytest.approx(828)

    def test_standard_account(self):
        result = apply_tax(1_000, STANDARD, 0)
        assert result.taxes == pytest.approx(300)
        assert result.net_interest == pytest.approx(528)

    def test_pel_early_uses_standard_rate(self):
        assert apply_tax(1_000, PEL, 3).taxes == pytest.approx(300)

    def test_pel_mid_term_pays_social_charges_only(self):
        result = apply_tax(1_000, PEL, 8)
        assert result.taxes == 0
        assert result.social_charges == pytest.approx(172)

    def test_pel_long_term_rate(self):
        assert apply_tax(1_000, PEL, 12).taxes == pytest.approx(240)

    def test_assurance_vie_allowance(self):
        result = apply_tax(10_000, ASSURANCE_VIE, 10)
        assert result.taxes == pytest.approx((10_000 - 4_600) * 0.075)
        assert result.social_charges == pytest.approx(1_720)
        assert apply_tax(3_000, ASSURANCE_VIE, 10).taxes == 0

    def test_assurance_vie_early(self):
        assert apply_tax(10_000, ASSURANCE_VIE, 4).taxes == pytest.approx(3_000)

    def test_zero_gains(self):
        result = apply_tax(0, PEA, 3)
        assert result.net_interest == 0
        assert result.effective_rate == 0

    @pytest.mark.parametrize("holding_years", [0, 1, 4, 5, 8, 12, 20])
    def test_net_within_gross(self, holding_years):
        for profile in ACCOUNT_PROFILES_FR_2024.values():
            result = apply_tax(2_500, profile, holding_years)
            assert 0 <= result.net_interest <= result.gross_interest

    def test_negative_inputs(self):
        with pytest.raises(InvalidParametersError, match="Gross interest"):
            apply_tax(-1, PEA, 3)
        with pytest.raises(InvalidParametersError, match="Holding period"):
            apply_tax(100, PEA, -1)


class TestCompareAccounts:
    def test_ranking(self, ten_year_plan):
        comparisons = compare_accounts(ten_year_plan)
        assert len(comparisons) == 5
        assert comparisons[0].profile.kind == AccountKind.LIVRET_A
        assert comparisons[-1].profile.kind == AccountKind.STANDARD
        nets = [c.net_final_amount for c in comparisons]
        assert nets == sorted(nets, reverse=True)

    def test_net_figures(self, ten_year_plan):
        livret = compare_accounts(ten_year_plan, [LIVRET_A])[0]
        assert livret.net_final_amount == pytest.approx(livret.savings.final_amount)
        assert livret.net_return == pytest.approx(livret.savings.total_interest / 25_000)

    def test_cap_overflow(self, ten_year_plan):
        by_kind = {c.profile.kind: c for c in compare_accounts(ten_year_plan)}
        assert by_kind[AccountKind.LIVRET_A].exceeds_cap
        assert not by_kind[AccountKind.PEA].exceeds_cap
        assert not by_kind[AccountKind.STANDARD].exceeds_cap

    def test_holding_override(self, ten_year_plan):
        early = {c.profile.kind: c for c in compare_accounts(ten_year_plan, holding_years=3)}
        late = {c.profile.kind: c for c in compare_accounts(ten_year_plan)}
        assert early[AccountKind.PEA].tax.taxes > 0
        assert late[AccountKind.PEA].tax.taxes == 0
