"""Tests for joblog.report: status styles and job/pipeline/project lines."""
import io

import pytest

from joblog.report import (
    Job,
    Pipeline,
    Project,
    print_jobs,
    print_pipeline,
    print_project,
    status_style,
)
from joblog.styled import Colorizer, Style

PROJECT = Project(id=7, name_with_namespace="group / app", web_url="https://gitlab.example.com/group/app")


def plain() -> Colorizer:
    return Colorizer(io.StringIO(), color=False)


@pytest.mark.parametrize(
    "status,style",
    [
        ("success", Style.GOOD),
        ("running", Style.GOOD),
        ("failed", Style.ERROR),
        ("canceled", Style.ERROR),
        ("pending", Style.WARNING),
        ("skipped", Style.WARNING),
        ("waiting_for_resource", Style.WARNING),
        ("created", Style.LITERAL),
        ("manual", Style.LITERAL),
        ("preparing", Style.LITERAL),
        ("scheduled", Style.LITERAL),
        ("bogus", None),
    ],
)
def test_status_style(status, style):
    assert status_style(status) is style


def test_print_jobs_in_run_order():
    jobs = [
        Job(id=3, status="failed", web_url="u3", name="test", stage="test"),
        Job(id=2, status="success", web_url="u2", name="build", stage="build"),
    ]
    c = plain()
    print_jobs(jobs, c)
    assert c.out.getvalue() == "- Job 2 build [build]: success\n- Job 3 test [test]: failed\n\n"


def test_print_jobs_empty_prints_nothing():
    c = plain()
    print_jobs([], c)
    assert c.out.getvalue() == ""


def test_print_project():
    c = plain()
    print_project(PROJECT, "main", c)
    assert c.out.getvalue() == "Project 7 ( group / app @ main ) (https://gitlab.example.com/group/app)\n"


def test_print_pipeline():
    c = plain()
    print_pipeline(Pipeline(id=99, status="running", web_url="https://p/99"), PROJECT, "main", c)
    assert c.out.getvalue() == "Pipeline 99 (group / app @ main): running (https://p/99)\n"


def test_job_from_dict():
    job = Job.from_dict({"id": 1, "status": "success", "web_url": "u", "name": "lint", "stage": "test", "extra": 1})
    assert job == Job(id=1, status="success", web_url="u", name="lint", stage="test")


def test_job_from_dict_missing_keys():
    with pytest.raises(ValueError, match="missing status, web_url"):
        Job.from_dict({"id": 1})


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError, match="expected a JSON object"):
        Project.from_dict(["not", "a", "dict"])
