"""
Sync summaries for people.

The plain-text summary is the stable format; the rich table is what the
CLI prints to a terminal.
"""

from __future__ import annotations

from rich.table import Table

from ccsync.sync.result import SyncResult


class SyncReporter:
    """Renders final sync statistics."""

    @staticmethod
    def format_skipped(result: SyncResult) -> str:
        text = str(result.skipped)
        if result.skipped and result.skip_reasons:
            reasons = sorted(result.skip_reasons.items(), key=lambda item: (-item[1], item[0]))
            text += "".join(f" ({reason}: {count})" for reason, count in reasons)
        return text

    @classmethod
    def generate_summary(cls, result: SyncResult) -> str:
        lines = ["", "=== Sync Summary ==="]
        lines.append(f"Created:  {result.created}")
        lines.append(f"Updated:  {result.updated}")
        lines.append(f"Deleted:  {result.deleted}")
        lines.append(f"Skipped:  {cls.format_skipped(result)}")
        lines.append(f"Conflicts: {result.conflicts}")

        if result.errors:
            lines.append("")
            lines.append(f"Errors ({len(result.errors)}):")
            lines.extend(f"  - {error}" for error in result.errors)

        lines.append("")
        lines.append(f"Total operations: {result.total_operations}")
        if result.is_success:
            lines.append("Status: ✓ Success")
        else:
            lines.append("Status: ✗ Completed with errors")

        return "\n".join(lines) + "\n"

    @classmethod
    def build_table(cls, result: SyncResult, title: str = "Sync Summary") -> Table:
        table = Table(title=title)
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Created", str(result.created))
        table.add_row("Updated", str(result.updated))
        table.add_row("Deleted", str(result.deleted))
        table.add_row("Skipped", cls.format_skipped(result))
        table.add_row("Conflicts", str(result.conflicts))
        table.add_row("Errors", str(len(result.errors)), style="red" if result.errors else None)
        table.add_row("Total operations", str(result.total_operations))
        return table
