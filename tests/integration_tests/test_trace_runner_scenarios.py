# tests/integration_tests/test_trace_runner_scenarios.py
# This file is part of Procov - Process Model Test Coverage
#
# End-to-end scenarios replaying recorded traces against BPMN models

"""End-to-end tests for the trace runner and the command line interface.

Each scenario writes a BPMN model and a CSV trace to a temporary
directory, replays the trace and checks the resulting coverage or the
exit code of the command.
"""

import logging
import sys

import pytest
import run_coverage
from logic.assertions import CoverageAssertionError
from logic.runner import TraceCoverageRunner
from model.element import ElementRef
from utils.logger import LogLevel, get_logger, set_log_level
from utils.model_reader import ModelFormatError
from utils.settings import AT_LEAST_ENV, CoverageSettings
from utils.trace_reader import TraceFormatError

BILLING_BPMN = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL">
  <bpmn:process id="billing">
    <bpmn:startEvent id="invoice"/>
    <bpmn:sequenceFlow id="pay_flow" sourceRef="invoice" targetRef="paid"/>
    <bpmn:endEvent id="paid"/>
  </bpmn:process>
</bpmn:definitions>
"""

HEADER = "test,kind,model_key,element_id,element_type\n"

SHIP_ROWS = [
    "test_ship,ELEMENT_ACTIVATED,order,order,PROCESS",
    "test_ship,ELEMENT_ACTIVATED,order,start,START_EVENT",
    "test_ship,SEQUENCE_FLOW_TAKEN,order,flow1,SEQUENCE_FLOW",
    "test_ship,ELEMENT_COMPLETED,order,check,EXCLUSIVE_GATEWAY",
    "test_ship,SEQUENCE_FLOW_TAKEN,order,flow2,SEQUENCE_FLOW",
    "test_ship,JOB_CREATED,order,ship,SERVICE_TASK",
    "test_ship,ELEMENT_ACTIVATED,order,ship,SERVICE_TASK",
    "test_ship,SEQUENCE_FLOW_TAKEN,order,flow4,SEQUENCE_FLOW",
    "test_ship,ELEMENT_ACTIVATED,order,end,END_EVENT",
]

REJECT_ROWS = [
    "test_reject,ELEMENT_ACTIVATED,order,start,START_EVENT",
    "test_reject,SEQUENCE_FLOW_TAKEN,order,flow1,SEQUENCE_FLOW",
    "test_reject,ELEMENT_ACTIVATED,order,check,EXCLUSIVE_GATEWAY",
    "test_reject,SEQUENCE_FLOW_TAKEN,order,flow3,SEQUENCE_FLOW",
    "test_reject,ELEMENT_ACTIVATED,order,reject,USER_TASK",
    "test_reject,SEQUENCE_FLOW_TAKEN,order,flow5,SEQUENCE_FLOW",
    "test_reject,ELEMENT_COMPLETED,order,end,END_EVENT",
]

BILLING_ROWS = [
    "test_ship,ELEMENT_ACTIVATED,billing,invoice,START_EVENT",
]

CONFLICTING_ORDER_BPMN = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL">
  <bpmn:process id="order">
    <bpmn:startEvent id="other"/>
  </bpmn:process>
</bpmn:definitions>
"""


@pytest.fixture
def workspace(tmp_path, sample_bpmn):
    """Write model files and provide a trace writer."""
    order_path = tmp_path / "order.bpmn"
    order_path.write_text(sample_bpmn, encoding="utf-8")
    billing_path = tmp_path / "billing.bpmn"
    billing_path.write_text(BILLING_BPMN, encoding="utf-8")

    class Workspace:
        order = order_path
        billing = billing_path
        root = tmp_path

        @staticmethod
        def trace(*rows, name="OrderTests.csv"):
            path = tmp_path / name
            path.write_text(HEADER + "\n".join(rows) + "\n", encoding="utf-8")
            return path

    return Workspace


class TestTraceCoverageRunner:
    """Replaying traces through a coverage session."""

    def test_two_tests_cover_the_whole_process(self, workspace):
        runner = TraceCoverageRunner([workspace.order], workspace.trace(*SHIP_ROWS, *REJECT_ROWS))
        report = runner.run()

        assert report.ratio == 1.0
        assert runner.missing_elements(report) == []
        assert runner.session.collector.suite_name == "OrderTests"
        assert runner.method_reports["test_ship"].ratio == pytest.approx(0.7)
        assert runner.method_reports["test_reject"].ratio == pytest.approx(0.7)

    def test_single_test_leaves_the_other_branch_missing(self, workspace):
        runner = TraceCoverageRunner([workspace.order], workspace.trace(*SHIP_ROWS), suite_name="ShipOnly")
        report = runner.run()

        assert report.ratio == pytest.approx(0.7)
        assert runner.missing_elements(report) == ["order:flow3", "order:flow5", "order:reject"]
        assert runner.session.collector.suite_name == "ShipOnly"

    def test_class_condition_failure(self, workspace):
        runner = TraceCoverageRunner([workspace.order], workspace.trace(*SHIP_ROWS))
        runner.add_class_condition(">= 90%")

        with pytest.raises(CoverageAssertionError):
            runner.run()

    def test_threshold_from_settings(self, workspace):
        settings = CoverageSettings(class_coverage_at_least=1.0)
        runner = TraceCoverageRunner([workspace.order], workspace.trace(*SHIP_ROWS, *REJECT_ROWS), settings)
        assert runner.run().ratio == 1.0

    def test_second_model_in_one_test_is_inconsistent(self, workspace):
        trace = workspace.trace(*SHIP_ROWS, *BILLING_ROWS, *REJECT_ROWS)
        runner = TraceCoverageRunner([workspace.order, workspace.billing], trace)
        report = runner.run()

        assert report.inconsistent_deployment
        assert ElementRef("billing", "invoice") in report.covered
        assert runner.method_reports["test_ship"].models_considered == frozenset({"order", "billing"})

    def test_excluding_the_second_model_restores_consistency(self, workspace):
        trace = workspace.trace(*SHIP_ROWS, *BILLING_ROWS, *REJECT_ROWS)
        settings = CoverageSettings(excluded_model_keys=frozenset({"billing"}))
        report = TraceCoverageRunner([workspace.order, workspace.billing], trace, settings).run()

        assert not report.inconsistent_deployment
        assert report.ratio == 1.0
        assert report.models_considered == frozenset({"order"})

    def test_rerun_replaces_method_report(self, workspace):
        rerun = [row.replace("test_reject", "test_ship") for row in REJECT_ROWS]
        trace = workspace.trace(*SHIP_ROWS, "test_other,VARIABLE_CREATED,order,,", *rerun)
        runner = TraceCoverageRunner([workspace.order], trace)
        report = runner.run()

        assert ElementRef("order", "reject") in runner.method_reports["test_ship"].covered
        assert ElementRef("order", "ship") not in runner.method_reports["test_ship"].covered
        assert report.ratio == 1.0

    def test_positions_must_increase(self, workspace):
        path = workspace.root / "positions.csv"
        path.write_text(
            "test,kind,model_key,element_id,position\n"
            "t1,ELEMENT_ACTIVATED,order,start,5\n"
            "t1,ELEMENT_ACTIVATED,order,end,3\n",
            encoding="utf-8",
        )
        with pytest.raises(TraceFormatError, match="Test t1"):
            TraceCoverageRunner([workspace.order], path).run()

    def test_same_process_id_in_two_files_is_a_model_error(self, workspace):
        conflicting = workspace.root / "order_v2.bpmn"
        conflicting.write_text(CONFLICTING_ORDER_BPMN, encoding="utf-8")

        with pytest.raises(ModelFormatError, match="conflicts") as exc_info:
            TraceCoverageRunner([workspace.order, conflicting], workspace.trace(*SHIP_ROWS))
        assert "order_v2.bpmn" in str(exc_info.value)


class TestCommandLine:
    """Exit codes of the run_coverage command."""

    @staticmethod
    def run_main(monkeypatch, *args):
        monkeypatch.setattr(sys, "argv", ["run_coverage.py", *map(str, args)])
        monkeypatch.delenv("PROCESS_COVERAGE_AT_LEAST", raising=False)
        monkeypatch.delenv("PROCESS_COVERAGE_EXCLUDE", raising=False)
        monkeypatch.delenv("PROCESS_COVERAGE_DETAILED_LOGGING", raising=False)
        return run_coverage.main()

    def test_successful_run(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS, *REJECT_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace, "-v", "--at-least", "1") == 0

    def test_validate_only(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.root / "absent.bpmn", "-t", trace, "--validate-only") == 0

    def test_trace_error(self, monkeypatch, workspace):
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", workspace.root / "absent.csv") == 1

    def test_condition_parse_error(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace, "--condition", ">= lots") == 2

    def test_model_error(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.root / "absent.bpmn", "-t", trace) == 3

    def test_undeployed_model_in_trace(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS, *BILLING_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace) == 3

    def test_assertion_failure(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace, "--condition", "== 100%") == 4

    def test_excluded_model_from_command_line(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS, *BILLING_ROWS, *REJECT_ROWS)
        args = ["-m", workspace.order, "-m", workspace.billing, "-t", trace, "-x", "billing", "--at-least", "1.0"]
        assert self.run_main(monkeypatch, *args) == 0

    def test_conflicting_models_exit_as_model_error(self, monkeypatch, workspace):
        conflicting = workspace.root / "order_v2.bpmn"
        conflicting.write_text(CONFLICTING_ORDER_BPMN, encoding="utf-8")
        trace = workspace.trace(*SHIP_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-m", conflicting, "-t", trace) == 3

    @pytest.mark.parametrize("threshold", ["80", "1.5", "-0.1"])
    def test_out_of_range_threshold_is_a_configuration_error(self, monkeypatch, workspace, threshold):
        trace = workspace.trace(*SHIP_ROWS, *REJECT_ROWS)
        assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace, "--at-least", threshold) == 6

    def test_malformed_threshold_in_environment_is_a_configuration_error(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS, *REJECT_ROWS)
        monkeypatch.setenv(AT_LEAST_ENV, "most")
        assert run_coverage.main(["-m", str(workspace.order), "-t", str(trace)]) == 6

    def test_quiet_run_only_logs_warnings(self, monkeypatch, workspace):
        trace = workspace.trace(*SHIP_ROWS, *REJECT_ROWS)
        try:
            assert self.run_main(monkeypatch, "-m", workspace.order, "-t", trace, "-q") == 0
            assert get_logger().logger.level == logging.WARNING
        finally:
            set_log_level(LogLevel.INFO)
