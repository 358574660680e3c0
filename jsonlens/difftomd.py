# coding: utf-8
"""
Module to render a JSON diff as a Markdown change list.
"""

from typing import Any, Dict, List

from jsonlens.common import process_template, write_output
from jsonlens.json_diff import ADDED, CHANGED, REMOVED, UNCHANGED, DiffNode, format_diff_value, summarize_diff


class DiffToMarkdownConverter:
    """
    Class to render a DiffNode tree as Markdown.
    """

    def __init__(self, diff: DiffNode, title: str = 'Diff', root_name: str = 'root'):
        self.diff = diff
        self.title = title
        self.root_name = root_name
        self.entries: List[Dict[str, Any]] = []

    def collect_entries(self, node: DiffNode, path: str):
        """
        Collect every leaf that is not unchanged, in tree order.
        """
        if node.children is not None:
            for key, child in node.children.items():
                self.collect_entries(child, f"{path}.{key}")
        elif node.array_items is not None:
            for index, item in enumerate(node.array_items):
                self.collect_entries(item, f"{path}[{index}]")
        elif node.status != UNCHANGED:
            self.entries.append({
                "status": node.status,
                "path": path,
                "detail": self.describe(node)
            })

    def describe(self, node: DiffNode) -> str:
        """
        Describe the values of a changed leaf.
        """
        if node.status == ADDED:
            return format_diff_value(node.new_value)
        if node.status == REMOVED:
            return format_diff_value(node.old_value)
        if node.status == CHANGED:
            return f"{format_diff_value(node.old_value)} -> {format_diff_value(node.new_value)}"
        return format_diff_value(node.new_value)

    def render(self) -> str:
        """
        Render the diff to a Markdown string.
        """
        self.entries = []
        self.collect_entries(self.diff, self.root_name)
        return process_template("difftomd/diff.md.jinja",
                                title=self.title,
                                summary=summarize_diff(self.diff),
                                entries=self.entries)

    def convert(self, markdown_path: str):
        """
        Render the diff and save it to a file.
        """
        write_output(self.render(), markdown_path)


def convert_diff_to_markdown(diff: DiffNode, title: str = 'Diff') -> str:
    """Renders a diff as Markdown."""
    return DiffToMarkdownConverter(diff, title).render()
