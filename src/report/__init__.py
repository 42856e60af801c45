from report.render import render_cycle_report, render_summary, render_violation

__all__ = ["render_cycle_report", "render_summary", "render_violation"]
