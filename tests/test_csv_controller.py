"""Tests for the editing session held by CSVController."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import logging

import pytest

from controllers.csv_controller import CSVController
from models.table_model import IndexOutOfRange, NotLoaded
from services.csv_service import CSVServiceError, ParseError


@pytest.fixture
def controller():
    c = CSVController()
    c.load_text("name,city\nAna,Lima\nLuis,Quito\nMarta,Bogota")
    return c


class TestDocument:

    def test_load_text(self, controller):
        assert controller.headers() == ("name", "city")
        assert len(controller.model) == 3

    def test_load_text_empty_fails_and_keeps_previous_document(self, controller):
        with pytest.raises(ParseError):
            controller.load_text("")
        assert len(controller.model) == 3

    def test_load_csv_keeps_model_instance(self, controller, tmp_path):
        p = tmp_path / "in.csv"
        p.write_text("a,b\n1,2", encoding="utf-8")
        model = controller.model
        controller.load_csv(p)
        assert controller.model is model
        assert model.rows() == [{"a": "1", "b": "2"}]
        assert controller.source_path == p

    def test_load_missing_file_fails(self, controller, tmp_path):
        with pytest.raises(CSVServiceError):
            controller.load_csv(tmp_path / "missing.csv")
        assert controller.headers() == ("name", "city")

    def test_load_clears_edit_session(self, controller):
        controller.begin_edit(0)
        controller.load_text("x\n1")
        assert controller.editing_row is None
        assert controller.draft == {}

    def test_new_document(self, controller):
        controller.new_document(["id", "value"])
        assert controller.headers() == ("id", "value")
        assert controller.rows() == []

    def test_reset(self, controller):
        controller.reset()
        assert not controller.is_loaded
        with pytest.raises(NotLoaded):
            controller.add_row({"name": "x"})


class TestEditSession:

    def test_begin_edit_copies_row_into_draft(self, controller):
        assert controller.begin_edit(1) == {"name": "Luis", "city": "Quito"}
        assert controller.editing_row == 1
        assert controller.draft == {"name": "Luis", "city": "Quito"}

    def test_commit_edit_updates_row_and_clears_session(self, controller):
        controller.begin_edit(1)
        controller.set_draft_value("city", "Cali")
        controller.commit_edit()
        assert controller.model.row(1) == {"name": "Luis", "city": "Cali"}
        assert controller.editing_row is None

    def test_draft_changes_do_not_touch_model_before_commit(self, controller):
        controller.begin_edit(0)
        controller.set_draft_value("name", "Otra")
        assert controller.model.row(0)["name"] == "Ana"

    def test_cancel_edit(self, controller):
        controller.begin_edit(0)
        controller.set_draft_value("name", "Otra")
        controller.cancel_edit()
        assert controller.editing_row is None
        assert controller.model.row(0)["name"] == "Ana"

    def test_commit_without_edit_fails(self, controller):
        with pytest.raises(CSVServiceError):
            controller.commit_edit()

    def test_begin_edit_out_of_range(self, controller):
        with pytest.raises(IndexOutOfRange):
            controller.begin_edit(5)
        assert controller.editing_row is None

    def test_add_row_from_draft(self, controller):
        controller.set_draft_value("name", "Pedro")
        controller.add_row()
        assert controller.model.row(3) == {"name": "Pedro", "city": ""}
        assert controller.draft == {}

    def test_add_row_with_values(self, controller):
        controller.add_row({"name": "Eva", "city": "Quito", "extra": "1"})
        assert controller.rows()[-1] == {"name": "Eva", "city": "Quito"}

    def test_deleting_edited_row_cancels_edit(self, controller):
        controller.begin_edit(1)
        controller.delete_row(1)
        assert controller.editing_row is None

    def test_deleting_earlier_row_shifts_edit_index(self, controller):
        controller.begin_edit(2)
        controller.set_draft_value("city", "Medellin")
        controller.delete_row(0)
        assert controller.editing_row == 1
        controller.commit_edit()
        assert controller.model.row(1) == {"name": "Marta", "city": "Medellin"}

    def test_deleting_later_row_keeps_edit_index(self, controller):
        controller.begin_edit(0)
        controller.delete_row(2)
        assert controller.editing_row == 0


class TestSearch:

    def test_empty_term_returns_all_rows_with_indices(self, controller):
        assert [i for i, _ in controller.search("")] == [0, 1, 2]

    def test_case_insensitive_match_keeps_model_index(self, controller):
        assert controller.search("QUITO") == [(1, {"name": "Luis", "city": "Quito"})]

    def test_no_match(self, controller):
        assert controller.search("zzz") == []


class TestExport:

    def test_export_text(self, controller):
        controller.delete_row(2)
        assert controller.export_text() == "name,city\nAna,Lima\nLuis,Quito"

    def test_save_csv_round_trips(self, controller, tmp_path):
        p = tmp_path / "out.csv"
        controller.add_row({"name": "Eva", "city": "Cusco"})
        controller.save_csv(p)
        expected = controller.model.rows()
        controller.load_csv(p)
        assert controller.rows() == expected

    def test_save_unloaded_fails_with_not_loaded(self, tmp_path):
        with pytest.raises(NotLoaded):
            CSVController().save_csv(tmp_path / "out.csv")

    def test_export_excel(self, controller, tmp_path):
        p = tmp_path / "out.xlsx"
        controller.export_excel(p)
        assert p.exists()

    def test_blank_row_in_single_column_survives_save_and_reload(self, controller, tmp_path):
        p = tmp_path / "notas.csv"
        controller.load_text("nota\nhola")
        controller.add_row({})
        controller.save_csv(p)
        controller.load_csv(p)
        assert controller.rows() == [{"nota": "hola"}, {"nota": ""}]


class TestFailureLogging:

    def test_failed_load_logs_warning(self, controller, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="controllers.csv_controller"):
            with pytest.raises(CSVServiceError):
                controller.load_csv(tmp_path / "missing.csv")
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_failed_save_logs_warning(self, controller, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="controllers.csv_controller"):
            with pytest.raises(CSVServiceError):
                controller.save_csv(tmp_path / "nope" / "out.csv")
        assert "out.csv" in caplog.text

    def test_save_unloaded_logs_warning(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="controllers.csv_controller"):
            with pytest.raises(NotLoaded):
                CSVController().save_csv(tmp_path / "out.csv")
        assert caplog.records
        assert not (tmp_path / "out.csv").exists()

    def test_failed_excel_export_logs_warning(self, controller, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="controllers.csv_controller"):
            with pytest.raises(CSVServiceError):
                controller.export_excel(tmp_path / "nope" / "out.xlsx")
        assert "out.xlsx" in caplog.text
