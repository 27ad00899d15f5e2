from debt_payoff.engine.integrity import IssueCode, check_debt_batch


def _codes(issues):
    return [i.code for i in issues]


class TestRowRules:
    def test_clean_batch(self, disagreement_debts):
        assert check_debt_batch(disagreement_debts) == []

    def test_empty_row(self):
        issues = check_debt_batch([{"name": "", "balance": "", "minPayment": None}])
        assert _codes(issues) == [IssueCode.EMPTY_DEBT_ROW]

    def test_negative_balance(self):
        issues = check_debt_batch([{"name": "Refund", "balance": -20, "minPayment": 10, "apr": 5}])
        assert _codes(issues) == [IssueCode.NEGATIVE_BALANCE]
        assert issues[0].debt_name == "Refund"
        assert issues[0].details == {"balance": "-20"}

    def test_negative_minimum(self):
        issues = check_debt_batch([{"name": "Card", "balance": 100, "minPayment": -10, "apr": 5}])
        assert IssueCode.NEGATIVE_MINIMUM in _codes(issues)

    def test_zero_minimum_with_balance(self):
        issues = check_debt_batch([{"name": "Card", "balance": 100, "minPayment": 0, "apr": 5}])
        assert _codes(issues) == [IssueCode.ZERO_MIN_WITH_BALANCE]

    def test_apr_out_of_range(self):
        issues = check_debt_batch([{"name": "Payday", "balance": 400, "minPayment": 50, "apr": 390}])
        assert _codes(issues) == [IssueCode.APR_OUT_OF_RANGE]

    def test_unreadable_field(self):
        issues = check_debt_batch([{"name": "Card", "balance": "lots", "minPayment": 10, "apr": 5}])
        assert _codes(issues) == [IssueCode.UNREADABLE_FIELD]
        assert issues[0].debt_name == "Card"


class TestBatchRules:
    def test_shared_apr_flagged(self):
        issues = check_debt_batch([
            {"name": "A", "balance": 100, "minPayment": 10, "apr": 19.99},
            {"name": "B", "balance": 200, "minPayment": 20, "apr": "0.1999"},
        ])
        assert _codes(issues) == [IssueCode.APR_BATCH_ANOMALY]
        assert issues[0].debt_name is None

    def test_single_debt_not_an_anomaly(self):
        issues = check_debt_batch([{"name": "A", "balance": 100, "minPayment": 10, "apr": 19.99}])
        assert issues == []
