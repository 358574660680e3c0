"""Tests for the file-level inspect, diff, filter and chart commands."""

import json
import os
import sys
import tempfile
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsonlens.common import load_json_argument, load_json_file
from jsonlens.filters import InvalidFilterRuleError
from jsonlens.jsonfilter import filter_json_records
from jsonlens.jsontochart import convert_json_to_chart
from jsonlens.jsontodiff import convert_json_to_diff
from jsonlens.jsontoschema import convert_json_to_schema, list_json_fields


def get_data(name):
    """Provides the path of a JSON test file."""
    return os.path.join(os.path.dirname(__file__), 'data', name)


class CommandTestCase(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def out(self, name):
        return os.path.join(self.temp_dir.name, name)

    def read_json(self, path):
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def read_text(self, path):
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def write_temp(self, name, content):
        path = self.out(name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path


class TestSchemaCommands(CommandTestCase):
    """Test cases for the schema and fields commands."""

    def test_schema(self):
        output = self.out('schema.json')
        convert_json_to_schema(get_data('users.json'), output)
        schema = self.read_json(output)
        self.assertEqual(schema["type"]["kind"], "object")
        users = schema["type"]["fields"]["users"]
        self.assertEqual(users["type"]["kind"], "array")
        self.assertFalse(users["optional"])

    def test_item_schema(self):
        output = self.out('item.json')
        convert_json_to_schema(get_data('users.json'), output, item_schema=True)
        fields = self.read_json(output)["type"]["fields"]
        self.assertEqual(list(fields), ["id", "name", "active", "score", "address", "email"])
        self.assertTrue(fields["email"]["optional"])
        self.assertTrue(fields["address"]["optional"])
        self.assertEqual(fields["score"]["type"], {
            "kind": "union",
            "types": [{"kind": "primitive", "type": "number"}, {"kind": "primitive", "type": "null"}],
        })

    def test_merged_snapshots(self):
        output = self.out('merged.json')
        convert_json_to_schema(get_data('users.json'), output, merge_files=[get_data('users_v2.json')])
        fields = self.read_json(output)["type"]["fields"]
        self.assertFalse(fields["page"]["optional"])
        self.assertTrue(fields["total"]["optional"])

    def test_markdown(self):
        output = self.out('schema.md')
        convert_json_to_schema(get_data('weather.json'), output, output_format='markdown')
        markdown = self.read_text(output)
        self.assertTrue(markdown.startswith("# Schema\n"))
        self.assertIn("| `[].temp` | `number \\| null` | no |", markdown)

    def test_invalid_format(self):
        with self.assertRaises(ValueError):
            convert_json_to_schema(get_data('users.json'), self.out('x'), output_format='yaml')

    def test_fields(self):
        output = self.out('fields.json')
        list_json_fields(get_data('users.json'), output)
        fields = {field["path"]: field for field in self.read_json(output)}
        self.assertEqual(list(fields), ["id", "name", "active", "score", "address.city", "email"])
        self.assertEqual(fields["score"], {"path": "score", "kind": "unknown", "optional": False})
        self.assertEqual(fields["email"], {"path": "email", "kind": "string", "optional": True})
        self.assertEqual(fields["active"]["kind"], "boolean")

    def test_numeric_fields(self):
        output = self.out('numeric.json')
        list_json_fields(get_data('users.json'), output, numeric_only=True)
        self.assertEqual(self.read_json(output), ["id", "score"])

    def test_fields_of_wrapped_records(self):
        path = self.write_temp('wrapped.json', '{"tags": ["a", "b"], "results": [{"name": "x", "n": 1}]}')
        output = self.out('fields.json')
        list_json_fields(path, output)
        self.assertEqual([field["path"] for field in self.read_json(output)], ["name", "n"])
        filtered = self.out('filtered.json')
        filter_json_records(path, filtered, '[{"type": "exists", "path": "name"}]')
        self.assertEqual(self.read_json(filtered), [{"name": "x", "n": 1}])
        list_json_fields(path, output, numeric_only=True)
        self.assertEqual(self.read_json(output), ["n"])


class TestDiffCommand(CommandTestCase):
    """Test cases for the diff command."""

    def test_diff_tree(self):
        output = self.out('diff.json')
        convert_json_to_diff(get_data('users.json'), get_data('users_v2.json'), output)
        diff = self.read_json(output)
        self.assertEqual(diff["status"], "changed")
        self.assertEqual(diff["children"]["page"], {"status": "changed", "oldValue": 1, "newValue": 2})
        self.assertEqual(diff["children"]["total"], {"status": "added", "newValue": 2})
        items = diff["children"]["users"]["arrayItems"]
        self.assertEqual([item["status"] for item in items], ["unchanged", "changed", "removed"])
        self.assertEqual(items[1]["children"]["name"]["newValue"], "Bob")

    def test_diff_summary(self):
        output = self.out('summary.json')
        convert_json_to_diff(get_data('users.json'), get_data('users_v2.json'), output, output_format='summary')
        self.assertEqual(self.read_json(output),
                         {"status": "changed", "added": 1, "removed": 1, "changed": 2, "unchanged": 9})

    def test_diff_markdown(self):
        output = self.out('diff.md')
        convert_json_to_diff(get_data('users.json'), get_data('users_v2.json'), output, output_format='markdown')
        markdown = self.read_text(output)
        self.assertIn('- **changed** `root.users[1].name`: "bob" -> "Bob"', markdown)
        self.assertIn("- **removed** `root.users[2]`: {5 keys}", markdown)

    def test_diff_requires_new_file(self):
        with self.assertRaises(ValueError):
            convert_json_to_diff(get_data('users.json'), None, self.out('x'))


class TestFilterCommand(CommandTestCase):
    """Test cases for the filter command."""

    def test_rules_file(self):
        output = self.out('filtered.json')
        filter_json_records(get_data('users.json'), output, get_data('rules.json'))
        self.assertEqual([record["name"] for record in self.read_json(output)], ["Alice"])

    def test_inline_rules(self):
        output = self.out('filtered.json')
        filter_json_records(get_data('users.json'), output,
                            '[{"type": "string", "path": "name", "mode": "contains", "value": "B"}]')
        self.assertEqual([record["id"] for record in self.read_json(output)], [2])

    def test_single_inline_rule(self):
        output = self.out('filtered.json')
        filter_json_records(get_data('users.json'), output, '{"type": "exists", "path": "email"}')
        self.assertEqual([record["id"] for record in self.read_json(output)], [3])

    def test_invalid_rule(self):
        with self.assertRaises(InvalidFilterRuleError):
            filter_json_records(get_data('users.json'), self.out('x'), '[{"type": "regex", "path": "name"}]')
        with self.assertRaises(InvalidFilterRuleError):
            filter_json_records(get_data('users.json'), self.out('x'), '[1, 2]')

    def test_no_records(self):
        path = self.write_temp('object.json', '{"a": 1}')
        with self.assertRaises(ValueError):
            filter_json_records(path, self.out('x'), '[]')


class TestChartCommand(CommandTestCase):
    """Test cases for the chart command."""

    def test_explicit_axes(self):
        output = self.out('chart.json')
        convert_json_to_chart(get_data('weather.json'), output, x_field='day', y_field='temp', chart_type='line')
        self.assertEqual(self.read_json(output), {
            "type": "line",
            "xField": "day",
            "yField": "temp",
            "data": [{"x": "Mon", "y": 10}, {"x": "Wed", "y": 14.5}],
        })

    def test_default_axes(self):
        output = self.out('chart.json')
        convert_json_to_chart(get_data('users.json'), output)
        chart = self.read_json(output)
        self.assertEqual((chart["xField"], chart["yField"], chart["type"]), ("name", "id", "bar"))
        self.assertEqual(chart["data"], [{"x": "Alice", "y": 1}, {"x": "bob", "y": 2}, {"x": "Carol", "y": 3}])

    def test_invalid_chart_type(self):
        with self.assertRaises(ValueError):
            convert_json_to_chart(get_data('weather.json'), self.out('x'), 'day', 'temp', 'pie')


class TestJsonLoading(CommandTestCase):
    """Test cases for JSON input loading."""

    def test_invalid_json(self):
        path = self.write_temp('broken.json', '{"a": ')
        with self.assertRaises(ValueError):
            load_json_file(path)

    def test_empty_file(self):
        path = self.write_temp('empty.json', '   ')
        with self.assertRaises(ValueError):
            load_json_file(path)

    def test_inline_or_file(self):
        self.assertEqual(load_json_argument('[1, 2]'), [1, 2])
        self.assertEqual(load_json_argument(get_data('weather.json'))[0], {"day": "Mon", "temp": 10})
        with self.assertRaises(ValueError):
            load_json_argument('{oops')


if __name__ == '__main__':
    unittest.main()
