"""Render text and list elements to Markdown."""

from pptxmd.model.schema import ListElement, Run, TextElement


INDENT = "\t"


def render_runs(runs: list[Run]) -> str:
    return "".join(run.render_as_md() for run in runs)


class TextRenderer:
    """Renders text shapes and lists."""

    def render_text(self, element: TextElement) -> str:
        """Runs with emphasis markup, followed by a blank line.

        Paragraph breaks are already carried by the trailing newline of
        each paragraph's last run.
        """
        return render_runs(element.runs) + "\n"

    def render_list(self, element: ListElement) -> str:
        """Render list items with per-level numbering.

        Each level keeps its own counter. Going deeper starts the new
        level at 1; coming back up drops the counters of deeper levels so
        they restart next time, while the shallower level resumes.

        Example for ordered items at levels [0, 1, 1, 0]::

            1. a
            \\t1. b
            \\t2. c
            2. d
        """
        lines: list[str] = []
        counters: list[int] = []

        for item in element.items:
            level = item.level
            if level + 1 > len(counters):
                counters.extend([0] * (level + 1 - len(counters)))
            elif level + 1 < len(counters):
                del counters[level + 1:]
            counters[level] += 1

            marker = f"{counters[level]}. " if item.is_ordered else "- "
            line = INDENT * level + marker + render_runs(item.runs)
            if not line.endswith("\n"):
                line += "\n"
            lines.append(line)

        return "".join(lines) + "\n"
