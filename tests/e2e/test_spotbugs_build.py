"""
End-to-end: configure variants, run the graph with a fake SpotBugs, read the sink.
"""

import pytest

from bugsweep.analysis.source_filter import SourceFilter
from bugsweep.analysis.spotbugs.configurator import SpotBugsConfigurator
from bugsweep.build.application.scheduler import TaskScheduler
from bugsweep.build.domain.enums import TaskState


@pytest.fixture
def configure(graph, sink, evaluate, fake_renderer, java_project):
    def _configure(runner, variants, html=True, **kwargs):
        configurator = SpotBugsConfigurator(
            graph,
            sink,
            evaluate,
            runner=runner,
            renderer=fake_renderer,
            reports_dir=java_project.root / "build" / "reports" / "spotbugs",
            html_report_enabled=html,
            **kwargs,
        )
        configurator.configure_all(variants)
        return configurator

    return _configure


class TestSpotBugsBuild:

    @pytest.mark.asyncio
    async def test_variants_feed_the_shared_sink(
        self, graph, sink, evaluate, configure, make_variant, java_project, make_runner
    ):
        runner = make_runner()
        configure(
            runner,
            [
                make_variant("debug", [java_project.source_dir], [java_project.classes_dir]),
                make_variant("release", [java_project.source_dir], [java_project.classes_dir]),
            ],
        )

        result = await TaskScheduler(graph).run_async([evaluate])

        assert result.succeeded
        assert len(runner.requests) == 2
        assert {v.variant for v in sink.records} == {"debug", "release"}
        tally = sink.for_tool("spotbugs")
        assert (tally.errors, tally.warnings) == (2, 2)
        assert sorted(p.name for p in tally.reports) == ["spotbugsDebugReport.html", "spotbugsReleaseReport.html"]
        assert [(t.errors, t.warnings) for t in evaluate.summary] == [(2, 2)]

    @pytest.mark.asyncio
    async def test_variant_without_sources_contributes_zero(
        self, graph, sink, evaluate, configure, make_variant, java_project, make_runner
    ):
        runner = make_runner()
        configure(
            runner,
            [make_variant("empty", [java_project.root / "src" / "none"], [java_project.classes_dir])],
            html=False,
        )

        result = await TaskScheduler(graph).run_async([evaluate])

        assert result.succeeded
        assert runner.requests == []
        assert result.outcome_for("collectSpotbugsEmptyViolations").state is TaskState.SUCCEEDED
        assert len(sink) == 0
        assert sink.for_tool("spotbugs").reports == [
            java_project.root / "build" / "reports" / "spotbugs" / "spotbugsEmptyReport.xml"
        ]

    @pytest.mark.asyncio
    async def test_source_filter_narrows_analysed_classes(
        self, graph, evaluate, configure, make_variant, java_project, make_runner
    ):
        runner = make_runner()
        configure(
            runner,
            [make_variant("main", [java_project.source_dir], [java_project.classes_dir])],
            source_filter=SourceFilter(includes=["**/Foo.java"]),
        )

        await TaskScheduler(graph).run_async([evaluate])

        assert [p.name for p in runner.requests[0].classes] == ["Foo$Inner.class", "Foo.class"]

    @pytest.mark.asyncio
    async def test_missing_report_fails_collection_and_blocks_evaluation(
        self, graph, sink, evaluate, configure, make_variant, java_project, make_runner
    ):
        configure(
            make_runner(write_report=False),
            [make_variant("debug", [java_project.source_dir], [java_project.classes_dir])],
            html=False,
        )

        result = await TaskScheduler(graph).run_async([evaluate])

        assert result.failed_tasks == ["spotbugsDebug"]
        assert set(result.skipped_tasks) == {"collectSpotbugsDebugViolations", "evaluateViolations"}
        assert len(sink) == 0
