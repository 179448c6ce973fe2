"""Tests for Category models."""

import pytest
from pydantic import ValidationError
from taskboard.models.category import Category, CategoryUpdate


@pytest.mark.unit
def test_category_defaults():
    """Test category default color and count."""
    category = Category(id="01J9ZK3Q8W5V7Y2N4M6P0R1S3T", name="Work")
    
    assert category.color == "#3B82F6"
    assert category.task_count == 0


@pytest.mark.unit
def test_category_wire_format():
    """Test camelCase round trip of taskCount."""
    category = Category.model_validate({"id": "c1", "name": "Work", "taskCount": 4})
    
    assert category.task_count == 4
    assert category.to_json_dict() == {"id": "c1", "name": "Work", "color": "#3B82F6", "taskCount": 4}


@pytest.mark.unit
def test_category_task_count_not_negative():
    """Test that taskCount cannot go below zero."""
    with pytest.raises(ValidationError):
        CategoryUpdate(task_count=-1)
