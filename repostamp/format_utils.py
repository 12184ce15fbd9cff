"""
Output format utilities for repostamp CLI commands.

Provides functions to format records as JSONL, JSON, YAML, CSV and TSV.
"""

import json
import csv
import io
import os
from typing import Dict, List, Any, Iterator, Optional
import yaml

FORMATS = ('jsonl', 'json', 'yaml', 'csv', 'tsv')


def format_output(data: Iterator[Dict[str, Any]], format: str,
                  fields: Optional[List[str]] = None, single: bool = False) -> Iterator[str]:
    """
    Format data according to the specified format.

    Args:
        data: Iterator of dictionaries to format
        format: Output format (jsonl, json, yaml, csv, tsv)
        fields: Optional list of fields to include (for CSV/TSV)
        single: The command returns exactly one record; json and yaml
            emit it as an object instead of a one-element list

    Yields:
        Formatted strings for output
    """
    if format == "jsonl":
        yield from format_jsonl(data)
    elif format == "json":
        yield from format_json(data, single)
    elif format == "yaml":
        yield from format_yaml(data, single)
    elif format == "csv":
        yield from format_delimited(data, fields, ',')
    elif format == "tsv":
        yield from format_delimited(data, fields, '\t')
    else:
        raise ValueError(f"Unknown format: {format}")


def format_jsonl(data: Iterator[Dict[str, Any]]) -> Iterator[str]:
    """Format data as JSON Lines (one JSON object per line)."""
    for item in data:
        yield json.dumps(item, ensure_ascii=False)


def format_json(data: Iterator[Dict[str, Any]], single: bool = False) -> Iterator[str]:
    """Format data as a JSON array, or one object for single-record commands."""
    all_data = list(data)
    document: Any = all_data[0] if single and all_data else all_data
    yield json.dumps(document, ensure_ascii=False, indent=2)


def format_yaml(data: Iterator[Dict[str, Any]], single: bool = False) -> Iterator[str]:
    """Format data as a YAML sequence, or one mapping for single-record commands."""
    all_data = list(data)
    document: Any = all_data[0] if single and all_data else all_data
    yield yaml.safe_dump(document, default_flow_style=False, allow_unicode=True, sort_keys=False).rstrip('\n')


def format_delimited(data: Iterator[Dict[str, Any]], fields: Optional[List[str]] = None,
                     delimiter: str = ',') -> Iterator[str]:
    """
    Format data as CSV or TSV.

    Args:
        data: Iterator of dictionaries
        fields: Fields to include. If None, uses all flattened fields, sorted.
        delimiter: Column separator
    """
    data_list = [flatten_dict(item) for item in data]
    if not data_list:
        return

    if fields is None:
        all_fields: set[str] = set()
        for item in data_list:
            all_fields.update(item.keys())
        fields = sorted(all_fields)

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=fields, delimiter=delimiter,
                            extrasaction='ignore', lineterminator='\n')
    writer.writeheader()
    for item in data_list:
        writer.writerow(item)

    yield output.getvalue().rstrip('\n')


def flatten_dict(d: Dict[str, Any], parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
    """
    Flatten a nested dictionary.

    Example:
        {'a': {'b': 1, 'c': 2}} -> {'a.b': 1, 'a.c': 2}
    """
    items: list[tuple[str, Any]] = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k

        if isinstance(v, dict):
            items.extend(flatten_dict(v, new_key, sep=sep).items())
        elif isinstance(v, list):
            # Lists of scalars become comma-separated strings
            items.append((new_key, ', '.join(str(item) for item in v)))
        else:
            items.append((new_key, v))

    return dict(items)


def get_format_from_env(default: str = 'jsonl') -> str:
    """
    Get output format from the REPOSTAMP_FORMAT environment variable.

    Args:
        default: Default format if not specified or unknown

    Returns:
        Format string
    """
    format = os.environ.get('REPOSTAMP_FORMAT', default).lower()
    if format not in FORMATS:
        return default
    return format
