#!/usr/bin/env python3

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Pydantic Models


class GenerateOptions(BaseModel):
    """Per-call generation options."""

    model_config = ConfigDict(extra="ignore")

    email_pattern: str | None = None  # Pattern facet for Text ranges with format Email


class GenerateRequest(BaseModel):
    """Request to generate an XSD for one class of a graph."""

    graph: list[dict[str, Any]]  # Flat list of Class and Property nodes
    root_class_id: str = Field(min_length=1)
    options: GenerateOptions | None = None


class GenerationErrorDetail(BaseModel):
    """Error body returned when generation fails."""

    error: str  # 'reference_not_found', 'unsupported_range_type', 'malformed_hierarchy',
    # 'malformed_node', 'recursive_nested_object'
    message: str
    identifier: str | None = None
