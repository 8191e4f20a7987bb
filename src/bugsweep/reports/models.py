"""Report locations."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bugsweep.shared.domain.base_model import BaseDomainModel


def html_report_path_for(xml_report: Path) -> Path:
    """``spotbugsDebugReport.xml`` -> ``spotbugsDebugReport.html``."""
    return Path(xml_report).with_suffix(".html")


@dataclass
class ReportArtifacts(BaseDomainModel):
    """XML report of an analysis task and, when rendered, its HTML twin."""

    xml_report_path: Path
    html_report_path: Optional[Path] = None

    @classmethod
    def for_xml(cls, xml_report: Path, html_enabled: bool) -> "ReportArtifacts":
        return cls(
            xml_report_path=Path(xml_report),
            html_report_path=html_report_path_for(xml_report) if html_enabled else None,
        )

    @property
    def preferred(self) -> Path:
        """The report a human should open: HTML when rendered, XML otherwise."""
        return self.html_report_path or self.xml_report_path
