"""One-line status reports for GitLab projects, pipelines and jobs (from API JSON)."""
from dataclasses import dataclass

from joblog.styled import Colorizer, Style, StyledStr

_STATUS_STYLES = {
    "success": Style.GOOD,
    "running": Style.GOOD,
    "canceled": Style.ERROR,
    "failed": Style.ERROR,
    "waiting_for_resource": Style.WARNING,
    "skipped": Style.WARNING,
    "pending": Style.WARNING,
    "created": Style.LITERAL,
    "manual": Style.LITERAL,
    "preparing": Style.LITERAL,
    "scheduled": Style.LITERAL,
}


def status_style(status: str) -> Style | None:
    """Style for a GitLab job/pipeline status; None for statuses we don't know."""
    return _STATUS_STYLES.get(status)


def _require(data: dict, kind: str, *keys: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"{kind}: expected a JSON object, got {type(data).__name__}")
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValueError(f"{kind}: missing {', '.join(missing)}")


@dataclass(frozen=True)
class Job:
    id: int
    status: str
    web_url: str
    name: str = ""
    stage: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Job":
        _require(data, "job", "id", "status", "web_url")
        return cls(
            id=data["id"],
            status=data["status"],
            web_url=data["web_url"],
            name=data.get("name") or "",
            stage=data.get("stage") or "",
        )


@dataclass(frozen=True)
class Pipeline:
    id: int
    status: str
    web_url: str

    @classmethod
    def from_dict(cls, data: dict) -> "Pipeline":
        _require(data, "pipeline", "id", "status", "web_url")
        return cls(id=data["id"], status=data["status"], web_url=data["web_url"])


@dataclass(frozen=True)
class Project:
    id: int
    name_with_namespace: str
    web_url: str

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        _require(data, "project", "id", "name_with_namespace", "web_url")
        return cls(id=data["id"], name_with_namespace=data["name_with_namespace"], web_url=data["web_url"])


def print_job_header(job: Job, colorizer: Colorizer) -> None:
    msg = StyledStr()
    msg.none("Log for job ")
    msg.literal(str(job.id))
    msg.none(": ")
    msg.stylize(status_style(job.status), job.status)
    msg.hint(f" ({job.web_url})")
    msg.none("\n\n")
    colorizer.print(msg, "job header")


def print_project(project: Project, ref: str, colorizer: Colorizer) -> None:
    msg = StyledStr()
    msg.none("Project ")
    msg.literal(str(project.id))
    msg.none(" ( ")
    msg.literal(project.name_with_namespace)
    msg.none(" @ ")
    msg.literal(ref)
    msg.none(" ) ")
    msg.hint(f"({project.web_url})")
    msg.none("\n")
    colorizer.print(msg, "project")


def print_pipeline(pipeline: Pipeline, project: Project, ref: str, colorizer: Colorizer) -> None:
    msg = StyledStr()
    msg.none("Pipeline ")
    msg.literal(str(pipeline.id))
    msg.none(f" ({project.name_with_namespace} @ {ref}): ")
    msg.stylize(status_style(pipeline.status), pipeline.status)
    msg.hint(f" ({pipeline.web_url})")
    msg.none("\n")
    colorizer.print(msg, "pipeline")


def print_jobs(jobs: list[Job], colorizer: Colorizer) -> None:
    """Print jobs in run order (the API lists the most recent first)."""
    if not jobs:
        return
    msg = StyledStr()
    for job in reversed(jobs):
        msg.none("- Job ")
        msg.literal(str(job.id))
        msg.none(f" {job.name} ")
        msg.hint(f"[{job.stage}]")
        msg.none(": ")
        msg.stylize(status_style(job.status), job.status)
        msg.none("\n")
    msg.none("\n")
    colorizer.print(msg, "jobs")
