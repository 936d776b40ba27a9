# src/netlist_core/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from ..constants import OVERFLOW_POLICIES
from ..units import DEFAULT_LAYOUT_UNIT
from .raw_data import ParsedComponentData, ParsedLayout
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

# Component ids must be single identifier tokens: they appear in point ids and
# cache keys, so '.' and '-' are forbidden.
ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator to enforce the project's naming conventions."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        """
        Validates that a value is a plain identifier.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint:
            return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                "and can only contain letters, numbers, and underscores. "
                f"This identifier contains the following forbidden character(s): {invalid_chars}"
            )
            self._error(field, message)

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(map(str, duplicates)))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class LayoutParser:
    """
    Parses and validates a layout description YAML file into the IR.
    It performs no unit conversion and instantiates no components.
    """
    _length_rule = {"type": ["number", "string"]}

    _point_rule = {"type": "list", "minlength": 2, "maxlength": 2, "schema": _length_rule}

    _position_schema = {
        "name": {"type": ["string", "number"], "required": True},
        "connections": {
            "type": "list", "required": True,
            "schema": {"type": "list", "minlength": 2, "maxlength": 2, "schema": {"type": "integer"}},
        },
    }

    _component_schema = {
        "id": {"type": "string", "required": True, "empty": False, "id_regex": True},
        "type": {"type": "string", "required": True, "empty": False},
        "name": {"type": "string", "required": False, "empty": False},
        "points": {"type": "list", "required": False, "schema": _point_rule},
        "placement": {
            "type": "dict", "required": False, "schema": {
                "x": _length_rule,
                "y": _length_rule,
                "rotation": {"type": ["number", "string"]},
                "mirrored": {"type": "boolean"},
            },
        },
        "properties": {
            "type": "dict", "required": False,
            "keysrules": {"type": "string", "id_regex": True},
            "valuesrules": {"type": ["number", "string", "boolean"]},
        },
        "positions": {
            "type": "list", "required": False, "minlength": 1,
            "schema": {"type": "dict", "schema": _position_schema},
        },
    }

    _schema = {
        "layout_name": {"type": "string", "required": False, "empty": False},
        "unit": {"type": "string", "required": False, "empty": False, "default": DEFAULT_LAYOUT_UNIT},
        "extraction": {
            "type": "dict", "required": False, "schema": {
                "tolerance": _length_rule,
                "snap_grid": {"type": ["number", "string"], "nullable": True},
                "max_configurations": {"type": "integer", "min": 1},
                "overflow_policy": {"type": "string", "allowed": list(OVERFLOW_POLICIES)},
            },
        },
        "components": {
            "type": "list", "required": True, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _component_schema},
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.info("LayoutParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedLayout:
        """Parses one layout description file and returns its IR."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing layout description: {resolved_path}")

        yaml_content = self._load_yaml(resolved_path)
        if not self._validator.validate(yaml_content):
            raise SchemaValidationError(self._validator.errors, resolved_path)

        validated_data = self._validator.document

        parsed_components: List[ParsedComponentData] = []
        for comp_data_raw in validated_data.get("components", []):
            parsed_components.append(
                ParsedComponentData(
                    instance_id=comp_data_raw["id"],
                    component_type=comp_data_raw["type"],
                    source_yaml_path=resolved_path,
                    name=comp_data_raw.get("name"),
                    raw_points=comp_data_raw.get("points"),
                    raw_placement=comp_data_raw.get("placement", {}),
                    raw_properties=comp_data_raw.get("properties", {}),
                    raw_positions=comp_data_raw.get("positions"),
                )
            )

        logger.debug(f"Parsed {len(parsed_components)} component(s) from {resolved_path.name}.")
        return ParsedLayout(
            layout_name=validated_data.get("layout_name", resolved_path.stem),
            unit=validated_data["unit"],
            source_yaml_path=resolved_path,
            components=parsed_components,
            raw_extraction_config=validated_data.get("extraction"),
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Layout file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
