import os
import tempfile

import pytest

from cascade_tree.component.tree import TreeNode
from cascade_tree.file_path import cascade_tree_dir
from cascade_tree.log import set_logging_file, toggle_rotation

"""
Before running all tests redirect all test logging to a temporary log file, turn off log rotation
"""

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def pytest_configure():
    fo = tempfile.NamedTemporaryFile()
    fo.close()  # Windows workaround for shared files
    pytest.tmp_log_file = fo.name
    pytest.log_test_file = os.path.join(cascade_tree_dir, "logs", "cascade_tree_log_test.log")
    if os.path.exists(pytest.log_test_file):
        os.remove(pytest.log_test_file)
    set_logging_file(fo.name, level="DEBUG")
    toggle_rotation(False)


@pytest.fixture
def before_log_test(request):
    set_logging_file(pytest.log_test_file, level="DEBUG")


@pytest.fixture
def after_log_test():
    yield
    set_logging_file(pytest.tmp_log_file, level="DEBUG")
    toggle_rotation(False)


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def scenario_tree():
    """Root{ A{ A1, A2 }, B }"""
    return [
        TreeNode(
            id="Root",
            label="Root",
            children=[
                TreeNode(
                    id="A",
                    label="A",
                    children=[TreeNode(id="A1", label="A1"), TreeNode(id="A2", label="A2")],
                ),
                TreeNode(id="B", label="B"),
            ],
        )
    ]


@pytest.fixture
def deep_tree():
    """Two roots, the first four levels deep."""
    return [
        {
            "id": "r1",
            "children": [
                {
                    "id": "a",
                    "children": [
                        {"id": "a1", "children": [{"id": "a1x"}, {"id": "a1y"}]},
                        {"id": "a2"},
                    ],
                },
                {"id": "b", "children": [{"id": "b1"}]},
            ],
        },
        {"id": "r2", "children": [{"id": "c"}]},
    ]


@pytest.fixture
def unified_tree():
    return [
        {
            "id": "category_A",
            "label": "Electronics",
            "children": [
                {"id": "category_C", "label": "Phones", "children": [{"id": "family_B"}]},
            ],
        },
        {"id": "family_D", "label": "Tools"},
        {"id": "untagged", "label": "Other"},
    ]
