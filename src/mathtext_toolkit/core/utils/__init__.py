"""Serialization helpers for core models."""

from .serialization import (
    deserialize_element,
    deserialize_elements,
    deserialize_solution,
    load_solution_json,
    save_formatted_solution_json,
    serialize_elements,
    serialize_equations,
    serialize_formatted_solution,
    serialize_formatted_step,
    serialize_solution,
)

__all__ = [
    "deserialize_element",
    "deserialize_elements",
    "deserialize_solution",
    "load_solution_json",
    "save_formatted_solution_json",
    "serialize_elements",
    "serialize_equations",
    "serialize_formatted_solution",
    "serialize_formatted_step",
    "serialize_solution",
]
