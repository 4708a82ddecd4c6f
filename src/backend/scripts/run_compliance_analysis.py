from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def _load_jobs(path: Path) -> list[dict]:
    if path.suffix.lower() == ".csv":
        with path.open(newline="") as handle:
            # Blank cells fall back to model defaults.
            return [
                {key.strip(): value for key, value in row.items() if key and value not in (None, "")}
                for row in csv.DictReader(handle)
            ]
    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("jobs", [])
    if not isinstance(data, list):
        raise SystemExit(f"Expected a list of job classifications in {path}")
    return data


def _format_pct(value: float) -> str:
    return f"{value:.2f}%"


def _render_markdown(verdict, issues) -> str:
    info = verdict.general_info
    lines = [
        "# Pay Equity Compliance Report",
        "",
        f"Generated at: {verdict.generated_at.isoformat()}",
        "",
        f"**{verdict.message}**",
        "",
        f"- State: {verdict.state.value}",
        f"- Compliant: {'yes' if verdict.is_compliant else 'no'}",
        f"- Manual review required: {'yes' if verdict.requires_manual_review else 'no'}",
        "",
        "## General Information",
        "",
        "| Group | Classes | Employees | Avg max monthly salary |",
        "|---|---|---|---|",
        f"| Male-dominated | {info.male_classes} | {info.male_employees} | {info.avg_max_pay_male:,.2f} |",
        f"| Female-dominated | {info.female_classes} | {info.female_employees} | {info.avg_max_pay_female:,.2f} |",
        f"| Balanced | {info.balanced_classes} | {info.balanced_employees} | {info.avg_max_pay_balanced:,.2f} |",
        f"| All jobs | {info.total_classes} | {info.total_employees} | {info.avg_max_pay_all:,.2f} |",
    ]

    stat = verdict.statistical_test
    if stat is not None:
        lines += [
            "",
            "## Statistical Analysis Test",
            f"- Status: {stat.status.value}",
            f"- Underpayment ratio: {_format_pct(stat.underpayment_ratio)}",
            f"- Male classes below predicted pay: {stat.male_classes_below_predicted} of {stat.male_total_classes} "
            f"({_format_pct(stat.male_percent_below_predicted)})",
            f"- Female classes below predicted pay: {stat.female_classes_below_predicted} of "
            f"{stat.female_total_classes} ({_format_pct(stat.female_percent_below_predicted)})",
            f"- T-test: df = {stat.t_test_df}, t = {stat.t_test_value:.3f}, critical value = {stat.critical_value:.3f}",
        ]

    for title, res in (
        ("Salary Range Test", verdict.salary_range_test),
        ("Exceptional Service Pay Test", verdict.exceptional_service_test),
    ):
        if res is None:
            continue
        lines += ["", f"## {title}", f"- Status: {res.status.value}", f"- {res.summary}"]
        for detail in res.details:
            lines.append(f"  - {detail.key}: {detail.message} | {detail.values}")

    if issues:
        lines += ["", "## Issues"]
        for issue in issues:
            suffix = "" if issue.gates_compliance else " (advisory)"
            lines.append(f"- {issue.name}{suffix}: {issue.issue}. {issue.threshold}.")

    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    _ensure_backend_on_path()

    from common.pay_equity import analyze_compliance, collect_compliance_issues, load_config

    parser = argparse.ArgumentParser(description="Run the pay equity compliance analysis on a job list.")
    parser.add_argument("--jobs", required=True, help="Job classifications (JSON or CSV).")
    parser.add_argument(
        "--config",
        default=os.getenv("PAY_EQUITY_CONFIG", ""),
        help="Analysis config (JSON or YAML). Defaults to $PAY_EQUITY_CONFIG.",
    )
    parser.add_argument("--format", choices=("markdown", "json"), default="markdown")
    parser.add_argument("--out", default="", help="Write the report here instead of stdout.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    jobs_path = Path(args.jobs)
    if not jobs_path.exists():
        raise SystemExit(f"Jobs file not found: {jobs_path}")
    config = None
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            raise SystemExit(f"Config file not found: {config_path}")
        config = load_config(config_path)

    verdict = analyze_compliance(_load_jobs(jobs_path), config=config)
    issues = collect_compliance_issues(verdict)

    if args.format == "json":
        payload = verdict.model_dump(mode="json")
        payload["issues"] = [issue.model_dump(mode="json") for issue in issues]
        output = json.dumps(payload, indent=2)
    else:
        output = _render_markdown(verdict, issues)

    if args.out:
        Path(args.out).write_text(output)
    else:
        print(output)
    return 0 if verdict.is_compliant else 1


if __name__ == "__main__":
    raise SystemExit(main())
