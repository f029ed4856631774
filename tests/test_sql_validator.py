# tests/test_sql_validator.py
"""Tests for the SQL validator service."""

import pytest

from querychart.services.sql_validator import SQLValidator


class TestSQLValidator:
    """SQL Validator test suite."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = SQLValidator()

    # === Valid SQL tests ===

    def test_valid_select(self):
        """Test valid SELECT statement."""
        sql = "SELECT id, name FROM users WHERE id = 1"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is True
        assert error is None

    def test_select_with_join(self):
        """Test SELECT with JOIN."""
        sql = (
            "SELECT ar.name, COUNT(al.album_id) AS album_count FROM artists ar "
            "JOIN albums al ON al.artist_id = ar.artist_id GROUP BY ar.name"
        )
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is True

    def test_select_with_subquery(self):
        """Test SELECT with subquery."""
        sql = "SELECT * FROM tracks WHERE album_id IN (SELECT album_id FROM albums)"
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is True

    def test_case_insensitive(self):
        """Test case-insensitive validation."""
        sql = "SeLeCt * FrOm tracks"
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is True

    def test_leading_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        sql = "\n   SELECT 1  \n"
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is True

    def test_trailing_semicolon(self):
        """Test that a single terminated statement is accepted."""
        sql = "SELECT * FROM tracks LIMIT 5;"
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is True

    # === Rejection tests ===

    def test_reject_insert(self):
        """Test INSERT statement rejection."""
        sql = "INSERT INTO artists (name) VALUES ('test')"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error == "Only SELECT queries are allowed"

    def test_reject_update(self):
        """Test UPDATE statement rejection."""
        sql = "UPDATE artists SET name = 'hacked' WHERE artist_id = 1"
        is_valid, _ = self.validator.validate(sql)
        assert is_valid is False

    def test_reject_drop(self):
        """Test DROP statement rejection."""
        is_valid, error = self.validator.validate("DROP TABLE tracks")
        assert is_valid is False
        assert error == "Only SELECT queries are allowed"

    def test_reject_cte(self):
        """Test that queries must literally start with SELECT."""
        sql = "WITH t AS (SELECT 1) SELECT * FROM t"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error == "Only SELECT queries are allowed"

    def test_reject_empty(self):
        """Test empty input rejection."""
        is_valid, _ = self.validator.validate("   ")
        assert is_valid is False

    def test_reject_stacked_statements(self):
        """Test a destructive statement chained after a SELECT."""
        sql = "SELECT * FROM t; DROP TABLE t"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error == "Query contains forbidden keyword: drop"

    def test_reject_keyword_in_literal(self):
        """Test that keywords inside string literals still reject."""
        sql = "SELECT name FROM tracks WHERE genre = 'update'"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error == "Query contains forbidden keyword: update"

    def test_reject_keyword_inside_identifier(self):
        """Test that keyword substrings inside identifiers reject."""
        sql = "SELECT created_at FROM invoices"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert "create" in error

    @pytest.mark.parametrize("keyword", [
        "drop", "delete", "insert", "update", "alter",
        "truncate", "create", "grant", "revoke",
    ])
    def test_every_forbidden_keyword(self, keyword):
        """Test each forbidden keyword anywhere in a SELECT."""
        sql = f"SELECT * FROM tracks WHERE note = '{keyword.upper()}'"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error == f"Query contains forbidden keyword: {keyword}"

    # === Parse check tests ===

    def test_reject_multiple_selects(self):
        """Test that two harmless statements are still rejected."""
        is_valid, error = self.validator.validate("SELECT 1; SELECT 2")
        assert is_valid is False
        assert error == "Only a single SELECT statement is allowed"

    def test_reject_unbalanced_parenthesis(self):
        """Test that text which does not parse is rejected."""
        sql = "SELECT * FROM tracks WHERE (album_id = 1"
        is_valid, error = self.validator.validate(sql)
        assert is_valid is False
        assert error.startswith("SQL syntax error")

    def test_parse_check_disabled(self):
        """Test that the keyword gate alone accepts stacked SELECTs."""
        validator = SQLValidator(parse_check=False)
        is_valid, error = validator.validate("SELECT 1; SELECT 2")
        assert is_valid is True
        assert error is None


class TestCustomKeywords:
    """Tests for a custom reject list."""

    def test_custom_keywords_replace_defaults(self):
        """Test that custom keywords replace the default list."""
        validator = SQLValidator(forbidden_keywords=["pg_sleep"])
        assert validator.validate("SELECT created_at FROM invoices") == (True, None)

        is_valid, error = validator.validate("SELECT PG_SLEEP(10)")
        assert is_valid is False
        assert error == "Query contains forbidden keyword: pg_sleep"
