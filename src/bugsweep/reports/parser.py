"""
SpotBugs XML report parsing.

Reads ``BugCollection`` documents produced with ``-xml:withMessages``::

    <BugCollection>
      <BugInstance type="NP_NULL_ON_SOME_PATH" priority="1" rank="6" category="CORRECTNESS">
        <ShortMessage>Possible null pointer dereference</ShortMessage>
        <LongMessage>Possible null pointer dereference in com.x.Foo.bar()</LongMessage>
        <Class classname="com.x.Foo">...</Class>
        <SourceLine classname="com.x.Foo" start="12" sourcepath="com/x/Foo.java" primary="true"/>
      </BugInstance>
    </BugCollection>
"""

from pathlib import Path
from typing import List, Optional
from xml.etree import ElementTree as ET

from bugsweep.shared.domain.exceptions import ReportError
from bugsweep.violations.models import Violation

TOOL_NAME = "spotbugs"

# Used when the tool is not run because there is nothing to analyse.
EMPTY_REPORT = '<?xml version="1.0" encoding="UTF-8"?>\n<BugCollection><Project projectName=""/></BugCollection>\n'


def write_empty_report(xml_report: Path) -> Path:
    """Write a report with no bug instances."""
    xml_report.parent.mkdir(parents=True, exist_ok=True)
    xml_report.write_text(EMPTY_REPORT, encoding="utf-8")
    return xml_report


def _int_or_none(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _primary_source_line(bug: ET.Element) -> Optional[ET.Element]:
    lines = bug.findall("SourceLine")
    for line in lines:
        if line.get("primary") == "true":
            return line
    if lines:
        return lines[0]
    return bug.find("Class/SourceLine")


def _parse_bug(bug: ET.Element, report: Path) -> Violation:
    priority = _int_or_none(bug.get("priority"))
    if priority is None:
        raise ReportError(
            f"BugInstance without a valid priority in {report}",
            context={"report": str(report), "type": bug.get("type")},
        )

    class_element = bug.find("Class")
    source_line = _primary_source_line(bug)
    message = bug.findtext("LongMessage") or bug.findtext("ShortMessage") or ""

    return Violation(
        tool=TOOL_NAME,
        bug_type=bug.get("type", ""),
        priority=priority,
        category=bug.get("category", ""),
        rank=_int_or_none(bug.get("rank")),
        class_name=class_element.get("classname", "") if class_element is not None else "",
        source_path=source_line.get("sourcepath") if source_line is not None else None,
        start_line=_int_or_none(source_line.get("start")) if source_line is not None else None,
        message=message.strip(),
    )


def parse_spotbugs_report(xml_report: Path) -> List[Violation]:
    """
    Parse every BugInstance of a SpotBugs XML report.

    Raises:
        ReportError: If the file is missing or is not a BugCollection.
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML.
    """
    xml_report = Path(xml_report)
    if not xml_report.is_file():
        raise ReportError(f"Report not found: {xml_report}", context={"report": str(xml_report)})

    root = ET.parse(xml_report).getroot()
    if root.tag != "BugCollection":
        raise ReportError(
            f"Not a SpotBugs report (root element <{root.tag}>): {xml_report}",
            context={"report": str(xml_report)},
        )
    return [_parse_bug(bug, xml_report) for bug in root.iter("BugInstance")]
