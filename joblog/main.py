#!/usr/bin/env python3
"""
joblog: view GitLab CI job logs in the terminal.
Renders section_start/section_end markers as banners and hides section bodies that
are collapsed or don't match --step. Logs are read from a file or stdin (no API calls).
"""
import argparse
import json
import logging
import os
import sys
import time
from pathlib import Path

from joblog.config import ConfigError, load_config
from joblog.log_render import LogFilter, print_log, render_log
from joblog.report import Job, Pipeline, Project, print_jobs, print_pipeline, print_project
from joblog.styled import ColorChoice, Colorizer, RenderError, use_color

logger = logging.getLogger(__name__)


def read_input(path: str) -> bytes:
    """Raw bytes from a file, or stdin for '-'."""
    if path == "-":
        return sys.stdin.buffer.read()
    with open(Path(path).expanduser(), "rb") as f:
        return f.read()


def load_json(path: str):
    with open(Path(path).expanduser()) as f:
        return json.load(f)


def build_parser(config: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="joblog", description="View GitLab CI job logs and job status.")
    colors = [c.value for c in ColorChoice]
    sub = parser.add_subparsers(dest="cmd", required=True)

    log = sub.add_parser("log", help="Render a raw job log with section banners")
    log.add_argument("log_path", help="Raw job log file, or - for stdin")
    log.add_argument("--job", help="Job JSON (GitLab API) used for the 'Log for job' header")
    log.add_argument("--all", action=argparse.BooleanOptionalAction, default=config["all"], help="Show every section body")
    log.add_argument("--step", default=config["step"], help="Section to show when --all is not set")
    log.add_argument("--color", choices=colors, default=config["color"].value)

    jobs = sub.add_parser("jobs", help="Print the jobs of a pipeline")
    jobs.add_argument("jobs_path", help="Jobs JSON list (GitLab API)")
    jobs.add_argument("--pipeline", help="Pipeline JSON; needs --project")
    jobs.add_argument("--project", help="Project JSON")
    jobs.add_argument("--ref", default="", help="Ref shown next to the project")
    jobs.add_argument("--color", choices=colors, default=config["color"].value)
    return parser


def cmd_log(args) -> None:
    log = read_input(args.log_path)
    log_filter = LogFilter(all=args.all, step=args.step)
    mode = ColorChoice(args.color)
    logger.debug("Rendering %d bytes (all=%s, step=%r, color=%s)", len(log), log_filter.all, log_filter.step, mode.value)
    if args.job:
        print_log(log, Job.from_dict(load_json(args.job)), log_filter, mode)
    else:
        render_log(log, log_filter, mode)


def cmd_jobs(args) -> None:
    colorizer = Colorizer(sys.stdout, use_color(ColorChoice(args.color), sys.stdout))
    data = load_json(args.jobs_path)
    if not isinstance(data, list):
        raise ValueError(f"{args.jobs_path}: expected a JSON list of jobs")
    jobs = [Job.from_dict(j) for j in data]
    project = Project.from_dict(load_json(args.project)) if args.project else None
    if project:
        print_project(project, args.ref, colorizer)
    if args.pipeline:
        if not project:
            raise ValueError("--pipeline needs --project")
        print_pipeline(Pipeline.from_dict(load_json(args.pipeline)), project, args.ref, colorizer)
    print_jobs(jobs, colorizer)
    colorizer.flush("jobs")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("JOBLOG_DEBUG") else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    logging.Formatter.converter = time.gmtime  # log timestamps in UTC

    try:
        config = load_config()
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    args = build_parser(config).parse_args(argv)
    try:
        if args.cmd == "log":
            cmd_log(args)
        else:
            cmd_jobs(args)
    except RenderError as e:
        logger.error("%s: %s", e, e.__cause__)
        return 1
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
