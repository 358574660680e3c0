import argparse
import io
import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsonlens.jsonlens import main


def get_data(name):
    """Provides the path of a JSON test file."""
    return os.path.join(os.path.dirname(__file__), 'data', name)


def get_out(name):
    return os.path.join(tempfile.gettempdir(), 'jsonlens_test', name)


def read_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class TestMain(unittest.TestCase):

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('argparse.ArgumentParser.print_help') as mock_help:
            main()
            mock_help.assert_called_once()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function with --version."""
        with patch('builtins.print') as mock_print:
            main()
            self.assertTrue(mock_print.call_args[0][0].startswith('jsonlens '))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='schema', input=get_data('users.json'), out=get_out('schema.json'),
        merge=None, item=True, format='json'))
    def test_main_schema_command(self, mock_parse_args):
        """Test main function with schema command."""
        main()
        schema = read_json(get_out('schema.json'))
        self.assertEqual(schema["type"]["fields"]["id"]["type"], {"kind": "primitive", "type": "number"})

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='fields', input=get_data('users.json'), out=None, numeric=True))
    def test_main_fields_to_stdout(self, mock_parse_args):
        """Test main function writing the fields command output to stdout."""
        with patch('sys.stdout', new_callable=io.StringIO) as mock_stdout:
            main()
        self.assertEqual(json.loads(mock_stdout.getvalue()), ["id", "score"])

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='diff', input=get_data('users.json'), new=get_data('users_v2.json'),
        out=get_out('summary.json'), format='summary'))
    def test_main_diff_command(self, mock_parse_args):
        """Test main function with diff command."""
        main()
        summary = read_json(get_out('summary.json'))
        self.assertEqual((summary["added"], summary["removed"], summary["changed"]), (1, 1, 2))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='filter', input=get_data('users.json'), rules=get_data('rules.json'),
        out=get_out('filtered.json')))
    def test_main_filter_command(self, mock_parse_args):
        """Test main function with filter command."""
        main()
        self.assertEqual([record["id"] for record in read_json(get_out('filtered.json'))], [1])

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='chart', input=get_data('weather.json'), x='day', y='temp', type='line',
        out=get_out('chart.json')))
    def test_main_chart_command(self, mock_parse_args):
        """Test main function with chart command."""
        main()
        chart = read_json(get_out('chart.json'))
        self.assertEqual(chart["type"], "line")
        self.assertEqual(len(chart["data"]), 2)

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='filter', input=get_data('users.json'), rules='[{"type": "regex", "path": "a"}]',
        out=get_out('invalid.json')))
    def test_main_invalid_rules(self, mock_parse_args):
        """Test main function exits with an error for an invalid rule."""
        with patch('builtins.print') as mock_print:
            with self.assertRaises(SystemExit) as context:
                main()
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(mock_print.call_args[0][0], "Error: ")


if __name__ == '__main__':
    unittest.main()
