"""
Commandline interface for cascade_tree.
"""

import os

import click
import toml

from cascade_tree.cli import dict_utils
from cascade_tree.component.selection import SelectionMode, SelectionPolicyType, TreeSelector
from cascade_tree.component.tree import (
    ancestor_ids,
    descendant_ids,
    find_node,
    flatten,
    load_forest,
    path_to_node,
)
from cascade_tree.exceptions import CascadeTreeError
from cascade_tree.file_path import cascade_tree_dir
from cascade_tree.user_config import config_file
from cascade_tree.version import __version__

_MODES = [mode.value for mode in SelectionMode]
_POLICIES = [policy.value for policy in SelectionPolicyType]


def _load(tree_file):
    try:
        return load_forest(tree_file)
    except CascadeTreeError as error:
        raise click.ClickException(str(error)) from error


def _format_ids(node_ids):
    return ", ".join(node_ids) if node_ids else "-"


def _render(forest, selected=(), expanded=None, level=0):
    """Yield one indented line per visible node."""
    for node in forest:
        marker = "[x]" if node.id in selected else "[ ]"
        fold = " "
        if node.children:
            fold = "-" if expanded is None or node.id in expanded else "+"
        yield f"{'  ' * level}{fold} {marker} {node.display_label} ({node.id})"
        if node.children and (expanded is None or node.id in expanded):
            yield from _render(node.children, selected, expanded, level + 1)


@click.group()
@click.version_option(__version__, prog_name="cascade-tree")
def cascade_tree():
    """
    Commandline entrypoint for cascade_tree.
    """


@click.command("configure", context_settings={"show_default": True})
@click.option(
    "--category-prefix", default=None, help="Prefix marking category ids in unified trees."
)
@click.option("--family-prefix", default=None, help="Prefix marking family ids in unified trees.")
@click.option(
    "--default-mode", type=click.Choice(_MODES), default=None, help="Default selection mode."
)
@click.option(
    "--default-policy", type=click.Choice(_POLICIES), default=None, help="Default selection policy."
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Console log level.",
)
# pylint: disable=too-many-arguments
def configure(category_prefix, family_prefix, default_mode, default_policy, log_level):
    """
    Configure cascade_tree.
    """
    os.makedirs(cascade_tree_dir, exist_ok=True)

    config = {}
    if os.path.exists(config_file):
        with open(config_file, encoding="utf-8") as file_handler:
            config = toml.loads(file_handler.read())

    selector = {
        "category_prefix": category_prefix,
        "family_prefix": family_prefix,
        "default_mode": default_mode,
        "default_policy": default_policy,
    }
    entry = {"selector": {key: value for key, value in selector.items() if value is not None}}
    if log_level is not None:
        entry["logging"] = {"level": log_level.upper()}
    if not entry["selector"]:
        del entry["selector"]

    if not entry:
        click.echo("Nothing to do. Your current config:")
        click.echo(toml.dumps(config))
        click.echo("run cascade-tree configure --help to see options")
    else:
        dict_utils.merge_overwrite(config, entry)
        with open(config_file, "w", encoding="utf-8") as file_handler:
            file_handler.write(toml.dumps(config))
    click.echo("done.")


@click.command("show")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--collapsed", is_flag=True, help="Show root nodes only.")
def show(tree_file, collapsed):
    """
    Print the tree stored in TREE_FILE.
    """
    forest = _load(tree_file)
    if not forest:
        click.echo("No nodes to display.")
        return
    for line in _render(forest, expanded=set() if collapsed else None):
        click.echo(line)
    click.echo(f"{flatten(forest).backend.node_count()} nodes")


@click.command("query")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("node_id")
def query(tree_file, node_id):
    """
    Print children, descendants, ancestors and path of NODE_ID.
    """
    forest = _load(tree_file)
    flattened = flatten(forest)
    if find_node(forest, node_id) is None:
        raise click.ClickException(f"Node {node_id} not found in {tree_file}.")
    click.echo(f"children: {_format_ids(flattened.backend.get_children(node_id))}")
    below = descendant_ids(node_id, flattened)
    descendants = [other for other in flattened.backend.get_all_nodes() if other in below]
    click.echo(f"descendants: {_format_ids(descendants)}")
    click.echo(f"ancestors: {_format_ids(ancestor_ids(node_id, flattened))}")
    click.echo(f"path: {_format_ids(path_to_node(forest, node_id))}")


@click.command("select")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("operations", nargs=-1)
@click.option("--mode", type=click.Choice(_MODES), default=None, help="Selection mode.")
@click.option("--policy", type=click.Choice(_POLICIES), default=None, help="Selection policy.")
@click.option("--show-tree", is_flag=True, help="Print the tree with the final selection.")
def select(tree_file, operations, mode, policy, show_tree):
    """
    Replay OPERATIONS on TREE_FILE and print the resulting selection.

    Each operation is ID=on, ID=off, ID (toggle) or clear.
    """
    forest = _load(tree_file)
    selector = TreeSelector(forest, mode=mode, policy=policy, expand_all=True)
    for operation in operations:
        if operation == "clear":
            selector.clear_all()
            continue
        node_id, _, state = operation.rpartition("=")
        if not node_id:
            selector.toggle(operation)
        elif state == "on":
            selector.set_selected(node_id, True)
        elif state == "off":
            selector.set_selected(node_id, False)
        else:
            raise click.BadParameter(
                f"'{operation}' must be ID=on, ID=off, ID or clear", param_hint="OPERATIONS"
            )

    if show_tree:
        for line in _render(forest, selected=selector.state.selected_ids):
            click.echo(line)
    click.echo(f"selected ({selector.selected_count}): {_format_ids(selector.selected_ids)}")
    if selector.mode == SelectionMode.UNIFIED:
        categories, families = selector.partition()
        click.echo(f"categories: {_format_ids(categories)}")
        click.echo(f"families: {_format_ids(families)}")


cascade_tree.add_command(configure)
cascade_tree.add_command(show)
cascade_tree.add_command(query)
cascade_tree.add_command(select)
