"""Tests for ``sqlsamples.core.statements.split_statements``."""

from __future__ import annotations

from sqlsamples.core.statements import split_statements


class TestSplitStatements:
    def test_simple(self):
        assert split_statements("SELECT 1; SELECT 2;") == ["SELECT 1", "SELECT 2"]

    def test_missing_final_semicolon(self):
        assert split_statements("SELECT 1;\nSELECT 2") == ["SELECT 1", "SELECT 2"]

    def test_semicolon_in_literals(self):
        sql = "SELECT ';' FROM t; SELECT \"a;b\" FROM t;"
        assert split_statements(sql) == ["SELECT ';' FROM t", 'SELECT "a;b" FROM t']

    def test_doubled_quote_escape(self):
        assert split_statements("SELECT 'it''s; fine';") == ["SELECT 'it''s; fine'"]

    def test_comments_dropped(self):
        sql = """
        -- header; with a semicolon
        SELECT 1; /* block; comment */
        -- trailing comment only
        """
        assert split_statements(sql) == ["SELECT 1"]

    def test_empty_statements_dropped(self):
        assert split_statements(";;  ;\n") == []


class TestCompoundBlocks:
    def test_trigger_body_stays_whole(self):
        sql = """
        CREATE TRIGGER trg AFTER INSERT ON t
        BEGIN
            INSERT INTO audit VALUES (1);
            INSERT INTO audit VALUES (2);
        END;
        SELECT 1;
        """
        statements = split_statements(sql)
        assert len(statements) == 2
        assert statements[0].startswith("CREATE TRIGGER")
        assert statements[0].endswith("END")
        assert statements[1] == "SELECT 1"

    def test_nested_if_and_case(self):
        sql = """
        CREATE PROCEDURE p()
        BEGIN
            IF 1 = 1 THEN
                SELECT CASE WHEN 1 = 1 THEN 'a' ELSE 'b' END FROM t;
            END IF;
        END;
        SELECT 2;
        """
        statements = split_statements(sql)
        assert len(statements) == 2
        assert statements[1] == "SELECT 2"

    def test_transaction_begin_is_not_a_block(self):
        assert split_statements("BEGIN; INSERT INTO t VALUES (1); COMMIT;") == [
            "BEGIN",
            "INSERT INTO t VALUES (1)",
            "COMMIT",
        ]

    def test_case_expression_outside_block(self):
        sql = "SELECT CASE x WHEN 1 THEN 'a' END FROM t; SELECT 2;"
        assert split_statements(sql) == ["SELECT CASE x WHEN 1 THEN 'a' END FROM t", "SELECT 2"]

    def test_row_trigger_body_stays_whole(self):
        sql = """
        CREATE TRIGGER trg AFTER INSERT ON a FOR EACH ROW BEGIN
            INSERT INTO b VALUES (1);
            UPDATE c SET x = CASE WHEN NEW.v > 0 THEN 1 ELSE 0 END;
        END;
        SELECT 1;
        """
        statements = split_statements(sql)
        assert len(statements) == 2
        assert "FOR EACH ROW BEGIN" in statements[0]
        assert statements[0].endswith("END")
        assert statements[1] == "SELECT 1"
