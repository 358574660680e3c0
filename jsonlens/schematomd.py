# coding: utf-8
"""
Module to render an inferred schema as a Markdown field table.
"""

from typing import Any, Dict, List

from jsonlens.common import process_template, write_output
from jsonlens.schema_inference import ArrayType, ObjectType, SchemaNode, format_type_string


class SchemaToMarkdownConverter:
    """
    Class to render an inferred schema as Markdown.
    """

    def __init__(self, schema: SchemaNode, title: str = 'Schema'):
        """
        Initialize the converter.

        :param schema: Inferred schema to render.
        :param title: Heading of the document.
        """
        self.schema = schema
        self.title = title
        self.fields: List[Dict[str, Any]] = []

    def collect_fields(self, node: SchemaNode, path: str):
        """
        Collect one row per object field, descending into objects and array items.
        """
        if isinstance(node.type, ObjectType):
            for key, child in node.type.fields.items():
                child_path = f"{path}.{key}" if path else key
                self.fields.append({
                    "path": child_path,
                    "type": format_type_string(child.type).replace("|", "\\|"),
                    "optional": child.optional
                })
                self.collect_fields(child, child_path)
        elif isinstance(node.type, ArrayType):
            self.collect_fields(node.type.item_schema, f"{path}[]")

    def render(self) -> str:
        """
        Render the schema to a Markdown string.
        """
        self.fields = []
        self.collect_fields(self.schema, '')
        return process_template("schematomd/schema.md.jinja",
                                title=self.title,
                                root_type=format_type_string(self.schema.type),
                                fields=self.fields)

    def convert(self, markdown_path: str):
        """
        Render the schema and save it to a file.
        """
        write_output(self.render(), markdown_path)


def convert_schema_to_markdown(schema: SchemaNode, title: str = 'Schema') -> str:
    """Renders a schema as Markdown."""
    return SchemaToMarkdownConverter(schema, title).render()
