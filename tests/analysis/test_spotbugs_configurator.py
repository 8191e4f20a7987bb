"""
Tests for SpotBugsConfigurator wiring across variants.
"""

import pytest

from bugsweep.analysis.spotbugs.configurator import SpotBugsConfigurator
from bugsweep.analysis.spotbugs.task import SpotBugsTask
from bugsweep.build.application.variant_filter import VariantFilter
from bugsweep.build.domain.enums import ConfigurationState, VariantKind
from bugsweep.reports.collector import CollectViolationsTask
from bugsweep.reports.html import GenerateHtmlReportTask
from bugsweep.shared.domain.exceptions import ConfigurationError
from bugsweep.shared.infrastructure.config import Settings


@pytest.fixture
def make_configurator(graph, sink, evaluate, fake_runner, fake_renderer, tmp_path):
    def _make(**kwargs):
        return SpotBugsConfigurator(
            graph,
            sink,
            evaluate,
            runner=fake_runner,
            renderer=fake_renderer,
            reports_dir=tmp_path / "reports",
            **kwargs,
        )

    return _make


def _tasks_of(graph, task_type):
    return [t for t in graph if isinstance(t, task_type)]


class TestConfigureAll:

    def test_two_variants_with_html(self, graph, evaluate, make_configurator, make_variant):
        configurator = make_configurator(html_report_enabled=True)

        configured = configurator.configure_all([make_variant("debug"), make_variant("release")])

        assert configured
        assert len(_tasks_of(graph, GenerateHtmlReportTask)) == 2
        assert len(_tasks_of(graph, CollectViolationsTask)) == 2
        assert set(evaluate.dependencies) == {
            "collectSpotbugsDebugViolations",
            "collectSpotbugsReleaseViolations",
        }

    def test_html_task_sits_between_analysis_and_collection(self, graph, make_configurator, make_variant):
        make_configurator(html_report_enabled=True).configure_all([make_variant("debug")])

        html = graph["generateSpotbugsDebugHtmlReport"]
        assert html.dependencies == ("spotbugsDebug",)
        assert graph["collectSpotbugsDebugViolations"].dependencies == ("generateSpotbugsDebugHtmlReport",)
        assert html.html_report.name == "spotbugsDebugReport.html"
        assert html.classpath == graph["spotbugsDebug"].tool_classpath

    def test_html_disabled_collects_straight_from_analysis(self, graph, make_configurator, make_variant):
        make_configurator(html_report_enabled=False).configure_all([make_variant("debug")])

        assert _tasks_of(graph, GenerateHtmlReportTask) == []
        collect = graph["collectSpotbugsDebugViolations"]
        assert collect.dependencies == ("spotbugsDebug",)
        assert collect.reports.html_report_path is None

    def test_second_call_is_a_no_op(self, graph, make_configurator, make_variant):
        configurator = make_configurator()
        variants = [make_variant("debug")]

        assert configurator.configure_all(variants)
        size = len(graph)
        assert not configurator.configure_all(variants)
        assert not configurator.configure_all([make_variant("release")])

        assert len(graph) == size + 1  # only the compile task registered by make_variant
        assert "spotbugsRelease" not in graph
        assert configurator.state is ConfigurationState.CONFIGURED

    def test_all_groups_use_the_same_path(self, graph, evaluate, make_configurator, make_variant):
        configurator = make_configurator(html_report_enabled=False)

        configurator.configure_all(
            [make_variant("debug")],
            [make_variant("debugAndroidTest")],
            [make_variant("debugUnitTest")],
        )

        assert {t.name for t in _tasks_of(graph, SpotBugsTask)} == {
            "spotbugsDebug",
            "spotbugsDebugAndroidTest",
            "spotbugsDebugUnitTest",
        }
        assert len(evaluate.dependencies) == 3

    def test_variant_filter_narrows_test_groups_only(self, graph, evaluate, make_configurator, make_variant):
        configurator = make_configurator(variant_filter=VariantFilter.by_names(["debugUnitTest"]))

        configurator.configure_all(
            [make_variant("debug"), make_variant("release")],
            [make_variant("debugAndroidTest")],
            [make_variant("debugUnitTest"), make_variant("releaseUnitTest")],
        )

        assert {t.name for t in _tasks_of(graph, SpotBugsTask)} == {
            "spotbugsDebug",
            "spotbugsRelease",
            "spotbugsDebugUnitTest",
        }
        assert len(evaluate.dependencies) == 3

    def test_empty_variant_list(self, evaluate, make_configurator):
        configurator = make_configurator()

        assert configurator.configure_all([])
        assert evaluate.dependencies == ()
        assert configurator.state is ConfigurationState.CONFIGURED

    def test_configuration_error_leaves_state_configuring(self, make_configurator, make_variant):
        configurator = make_configurator()

        with pytest.raises(ConfigurationError):
            configurator.configure_all([make_variant("debug", kind=VariantKind.PLATFORM)])
        assert configurator.state is ConfigurationState.CONFIGURING
        assert not configurator.configure_all([make_variant("main")])

    def test_plan_runs_collection_before_evaluation(self, graph, evaluate, make_configurator, make_variant):
        make_configurator().configure_all([make_variant("debug")])

        plan = [t.name for t in graph.execution_plan([evaluate])]
        assert plan == [
            "compileDebugJava",
            "spotbugsDebug",
            "generateSpotbugsDebugHtmlReport",
            "collectSpotbugsDebugViolations",
            "evaluateViolations",
        ]


class TestFromSettings:

    def test_builds_runner_and_reports_dir_from_settings(self, graph, sink, evaluate, tmp_path):
        settings = Settings(
            reports_dir="out/spotbugs",
            spotbugs_classpath=["/sb/spotbugs.jar"],
            java_executable="/jdk/bin/java",
            html_report_enabled=False,
        )

        configurator = SpotBugsConfigurator.from_settings(graph, sink, evaluate, settings, tmp_path)

        assert configurator.task_factory.reports_dir == tmp_path / "out" / "spotbugs"
        assert configurator.task_factory.runner.java_executable == "/jdk/bin/java"
        assert [str(p) for p in configurator.task_factory.runner.tool_classpath] == ["/sb/spotbugs.jar"]
        assert configurator.html_report_enabled is False

    def test_explicit_html_flag_wins(self, graph, sink, evaluate, tmp_path):
        settings = Settings(html_report_enabled=False)

        configurator = SpotBugsConfigurator.from_settings(
            graph, sink, evaluate, settings, tmp_path, html_report_enabled=True
        )
        assert configurator.html_report_enabled is True
