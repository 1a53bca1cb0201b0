"""End-to-end tests for project aggregation."""

from __future__ import annotations

from pathlib import Path

from tests._fixtures.project_builder import ProjectBuilder
from webpulse.aggregator import (
    ProjectAggregator,
    analyze_js_imports,
    analyze_project_type,
    analyze_salesforce_metadata,
    traverse_directory,
)
from webpulse.models import ProjectRecord

_PAGE = """
<html>
  <head>
    <script src="a.js"></script>
    <script src="b.js"></script>
    <script src="c.js"></script>
  </head>
  <body></body>
</html>
"""


def test_flat_react_project(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "index.html": _PAGE,
            "package.json": '{"name": "app", "dependencies": {"react": "^18.2.0"}}',
            "assets/logo.png": "png",
        }
    )

    project = project_builder.analyze()

    assert project is not None
    assert project.html_file_count == 1
    assert project.json_file_count == 0
    assert project.image_file_count == 1
    assert project.total_html_info.script_count == 3
    assert project.framework_info.has_react is True
    assert project.framework == "React"
    assert [(dep.name, dep.version) for dep in project.dependencies] == [("react", "18.2.0")]
    assert project.total_dependencies == 1
    assert project.framework_dependencies == 1
    assert project.prod_dependencies == 1
    assert project.dev_dependencies == 0
    assert project.is_monorepo is False


def test_lerna_monorepo(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "lerna.json": '{"version": "independent", "packages": ["packages/*"]}',
            "package.json": '{"name": "root", "private": true}',
            "packages/a/package.json": '{"name": "a", "dependencies": {"b": "1.0.0"}}',
            "packages/b/package.json": '{"name": "b", "version": "1.0.0"}',
            "packages/b/index.js": "module.exports = function () {};\n",
        }
    )

    project = project_builder.analyze()

    assert project is not None
    assert project.is_monorepo is True
    assert project.workspace.is_lerna is True
    assert project.workspace.version_strategy == "independent"
    assert project.workspace.package_count == 2
    assert project.js_file_count == 1
    # Each manifest is recorded once even though the resolver and the walk both read it.
    assert project.total_dependencies == 1


def test_module_systems_and_paths(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "src/main.js": """
            import React from 'react';
            const util = require('./util');
            import('./lazy');
            require('../node_modules/left-pad');
            """,
        }
    )

    project = project_builder.analyze()

    assert project is not None
    assert project.uses_commonjs is True
    assert project.uses_esmodules is True
    assert list(project.module_paths) == ["./util", "react", "./lazy"]


def test_analyze_js_imports_handles_named_and_bare_imports() -> None:
    project = ProjectRecord()
    analyze_js_imports("import { a, b } from \"./lib\";\nimport './styles.css';\n", project)

    assert list(project.module_paths) == ["./lib", "./styles.css"]
    assert project.uses_commonjs is False


def test_scanner_issues_carry_file_location(project_builder: ProjectBuilder) -> None:
    scripts = "\n".join(f'<script src="s{index}.js"></script>' for index in range(16))
    project_builder.write({"pages/index.html": scripts})

    project = project_builder.analyze()

    assert project is not None
    assert project.potential_issue_count == 1
    issue = project.potential_issues[0]
    assert issue.description == "High number of script tags (16) may impact performance"
    assert issue.location == "pages/index.html"


def test_external_resource_and_framework_issues(project_builder: ProjectBuilder) -> None:
    scripts = "\n".join(
        f'<script src="https://cdn.example.com/lib{index}.js"></script>' for index in range(11)
    )
    project_builder.write(
        {
            "index.html": scripts,
            "package.json": '{"dependencies": {"react": "^18.2.0", "vue": "^3.4.0"}}',
        }
    )

    project = project_builder.analyze()

    assert project is not None
    descriptions = [issue.description for issue in project.potential_issues]
    assert "Multiple framework dependencies detected (2) - consider consolidating" in descriptions
    assert "High number of external JavaScript resources (11) may impact load time" in descriptions
    assert project.external_resource_count == 11
    assert project.framework == "React"


def test_salesforce_metadata_is_opt_in(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "objects/Account.xml": '<?xml version="1.0"?>\n<CustomObject xmlns="http://soap.sforce.com/2006/04/metadata">\n</CustomObject>\n',
        }
    )

    without = project_builder.analyze()
    assert without is not None
    assert without.xml_file_count == 1
    assert without.salesforce_metadata_count == 0

    project_builder.write({".webpulse.yml": "salesforce: true\n"})
    with_flag = project_builder.analyze()
    assert with_flag is not None
    assert with_flag.salesforce_metadata_count == 1


def test_analyze_salesforce_metadata_direct(tmp_path: Path) -> None:
    metadata = tmp_path / "Case.xml"
    metadata.write_text("<CustomObject>\n</CustomObject>\n", encoding="utf-8")
    other = tmp_path / "layout.xml"
    other.write_text("<Layout/>\n", encoding="utf-8")
    project = ProjectRecord()

    assert analyze_salesforce_metadata(metadata, project) is True
    assert analyze_salesforce_metadata(other, project) is False
    assert analyze_salesforce_metadata(tmp_path / "missing.xml", project) is False
    assert list(project.salesforce_metadata) == [str(metadata)]


def test_missing_root_yields_none(tmp_path: Path) -> None:
    assert analyze_project_type(tmp_path / "missing") is None
    assert traverse_directory(tmp_path / "missing", ProjectRecord()) == -1


def test_traverse_directory_fills_existing_record(project_builder: ProjectBuilder) -> None:
    project_builder.write({"style.css": "a { color: red; }\n"})
    project = ProjectRecord()

    assert traverse_directory(project_builder.path(), project) == 0
    assert project.css_file_count == 1


def test_repeated_runs_are_independent(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "index.html": _PAGE,
            "package.json": '{"dependencies": {"react": "^18.2.0"}, "devDependencies": {"jest": "^29.0.0"}}',
        }
    )
    aggregator = ProjectAggregator()

    first = aggregator.analyze(project_builder.path())
    second = aggregator.analyze(project_builder.path())

    assert first is not None and second is not None
    assert first.to_dict() == second.to_dict()
    assert second.total_dependencies == 2
