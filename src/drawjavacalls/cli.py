"""
Command Line Interface for DrawJavaCalls.

This module provides the CLI for building call diagrams outside an editor.
The diagram lives in its file: every editing command loads the file,
applies one change and writes it back in the format given by the file
extension (.puml, .mmd or .drawio).

Commands:
    - new: Start an empty diagram file
    - add: Add a call (child of the selection, or sibling with --sibling)
    - delete: Remove an element and its relations
    - rename: Change an element, keeping its relations attached
    - relate: Add or remove a relation between two identifiers
    - show: List elements and relations
    - convert: Regenerate a diagram in another format
    - render: Render a PlantUML diagram to SVG
    - config-show: Show current configuration

Example Usage:
    $ drawjavacalls --project-root ~/dev/shop add calls.puml ~/dev/shop/src/Main.java main --link "#main"
    $ drawjavacalls add calls.puml ~/dev/shop/src/Repo.java load --link ":42"
    $ drawjavacalls convert calls.puml --to mermaid -o calls.mmd

Author: DrawJavaCalls Team
"""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .config import PathRewriteConfig, get_config, set_config
from .constants import DiagramFormat
from .paths import expand_placeholder
from .services.diagram import DiagramService
from .tools.diagram_files import convert_diagram, format_for_path, load_diagram, save_diagram
from .tools.rendering import PlantUmlCliRenderer

console = Console()

FORMAT_CHOICES = [diagram_format.value for diagram_format in DiagramFormat]


def _open_diagram(file: str) -> DiagramService:
    """Load a diagram file into a new service; a missing or empty file is a new diagram."""
    path = Path(file)
    diagram_format = format_for_path(path)
    if diagram_format is None:
        raise click.ClickException(
            f"Unsupported diagram extension: {path.suffix or '(none)'} (use .puml, .mmd or .drawio)"
        )

    service = DiagramService(get_config())
    service.diagram_format = diagram_format

    if not path.exists():
        return service

    result = load_diagram(service, path)
    if result["status"] == "foreign":
        raise click.ClickException(f"{file} was not generated by DrawJavaCalls")
    return service


def _select(service: DiagramService, identifier: str) -> None:
    if service.find_by_identifier(identifier) is None:
        raise click.ClickException(f"No element with identifier {identifier}")
    service.select_by_identifier(identifier)


@click.group()
@click.option(
    "--project-root",
    type=click.Path(file_okay=False),
    help="Project root written as $projectsPath/<folder> in links"
)
@click.option(
    "--custom-root",
    default="",
    help="Root kept verbatim in links when --no-project-root is given"
)
@click.option("--no-project-root", is_flag=True, help="Do not use the $projectsPath placeholder")
@click.pass_context
def main(ctx, project_root, custom_root, no_project_root):
    """DrawJavaCalls - Call diagrams for code reading sessions.

    Builds a diagram of method calls one step at a time and writes it
    as PlantUML, Mermaid or draw.io. Generated files can be loaded back
    and edited further.

    \b
    Quick Start:
        # Start a diagram and add the entry point
        drawjavacalls new calls.puml
        drawjavacalls add calls.puml src/Main.java main --link "#main"

        # Each add is called by the previous one, or use --sibling
        drawjavacalls add calls.puml src/Repo.java load --link "#load"
        drawjavacalls add calls.puml src/Cache.java get --sibling

        # See what the diagram contains
        drawjavacalls show calls.puml
    """
    ctx.ensure_object(dict)

    if project_root or custom_root or no_project_root:
        config = get_config()
        paths = PathRewriteConfig(
            use_project_root=not no_project_root,
            custom_root_path=custom_root,
            project_root=project_root,
        )
        set_config(config.model_copy(update={"paths": paths}))


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def new(file, force):
    """Start an empty diagram.

    FILE: Diagram file to create (.puml, .mmd or .drawio)
    """
    if Path(file).exists() and not force:
        raise click.ClickException(f"{file} already exists (use --force to overwrite)")

    diagram_format = format_for_path(file)
    if diagram_format is None:
        raise click.ClickException(f"Unsupported diagram extension: {Path(file).suffix or '(none)'}")

    service = DiagramService(get_config())
    service.diagram_format = diagram_format
    save_diagram(service, file)
    console.print(f"[green]✓ Created {file}[/green]")


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("file_path")
@click.argument("title")
@click.option("--group", "-g", help="Dot separated group, e.g. 'service.orders'")
@click.option("--link", "-l", "link_reference", default="", help="Link reference, '#name' or ':line'")
@click.option("--sibling", "-s", is_flag=True, help="Add as a sibling of the selected element")
@click.option("--select", "select_id", help="Identifier to add from (defaults to the last element)")
def add(file, file_path, title, group, link_reference, sibling, select_id):
    """Add a call to the diagram.

    \b
    FILE: Diagram file
    FILE_PATH: Source file of the called code
    TITLE: Name shown for the call, usually the method name
    """
    service = _open_diagram(file)
    if select_id:
        _select(service, select_id)

    if sibling:
        element = service.add_sibling(file_path, title, group=group, link_reference=link_reference)
    else:
        element = service.add_child(file_path, title, group=group, link_reference=link_reference)

    save_diagram(service, file)
    console.print(f"[green]✓ Added {element.get_identifier()}[/green]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--select", "select_id", required=True, help="Identifier of the element to delete")
def delete(file, select_id):
    """Remove an element and every relation touching it.

    FILE: Diagram file
    """
    service = _open_diagram(file)
    _select(service, select_id)
    service.delete_selected()
    save_diagram(service, file)
    console.print(f"[green]✓ Deleted {select_id}[/green]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("identifier")
@click.option("--file-path", "-f", help="New source file")
@click.option("--title", "-t", help="New title")
@click.option("--group", "-g", help="New group, '' removes the group")
@click.option("--link", "-l", "link_reference", help="New link reference")
def rename(file, identifier, file_path, title, group, link_reference):
    """Change an element; relations follow the new identifier.

    \b
    FILE: Diagram file
    IDENTIFIER: Current identifier of the element
    """
    service = _open_diagram(file)
    element = service.find_by_identifier(identifier)
    if element is None:
        raise click.ClickException(f"No element with identifier {identifier}")

    if group is None:
        new_group = element.group
    else:
        new_group = group or None

    service.update_element(
        element,
        file_path if file_path is not None else element.file_path,
        title if title is not None else element.title,
        new_group,
        link_reference if link_reference is not None else element.link_reference,
    )
    save_diagram(service, file)
    console.print(f"[green]✓ {identifier} → {element.get_identifier()}[/green]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("origin")
@click.argument("target")
@click.option("--remove", is_flag=True, help="Remove the relation instead of adding it")
def relate(file, origin, target, remove):
    """Add a relation ORIGIN --> TARGET.

    \b
    FILE: Diagram file
    ORIGIN: Identifier of the caller
    TARGET: Identifier of the callee
    """
    service = _open_diagram(file)

    if remove:
        matching = [r for r in service.relations if r.origin == origin and r.target == target]
        if not matching:
            raise click.ClickException(f"No relation {origin} --> {target}")
        service.remove_relation(matching[0])
        message = f"Removed {origin} --> {target}"
    else:
        for identifier in (origin, target):
            if service.find_by_identifier(identifier) is None:
                console.print(f"[yellow]Warning: no element with identifier {identifier}[/yellow]")
        service.add_relation(origin, target)
        message = f"Added {origin} --> {target}"

    save_diagram(service, file)
    console.print(f"[green]✓ {message}[/green]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def show(file):
    """List the elements and relations of a diagram.

    FILE: Diagram file
    """
    service = _open_diagram(file)
    elements = service.elements
    relations = service.relations

    if not elements:
        console.print("[yellow]The diagram is empty[/yellow]")
        return

    console.print(f"\n[bold]{service.diagram_format.display_name} diagram: {file}[/bold]\n")

    table = Table()
    table.add_column("#", style="dim", justify="right")
    table.add_column("Identifier", style="cyan")
    table.add_column("Group")
    table.add_column("File", style="dim")
    table.add_column("Link")

    for idx, element in enumerate(elements, 1):
        table.add_row(
            str(idx),
            element.get_identifier(),
            element.group or "[dim]-[/dim]",
            element.file_path,
            element.link_reference or "[dim]-[/dim]",
        )

    console.print(table)

    if relations:
        console.print("\n[bold]Relations:[/bold]")
        relation_table = Table()
        relation_table.add_column("Origin", style="cyan")
        relation_table.add_column("Target", style="green")
        for relation in relations:
            relation_table.add_row(relation.origin, relation.target)
        console.print(relation_table)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--to", "target_format", type=click.Choice(FORMAT_CHOICES), required=True, help="Target format")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (prints to stdout if omitted)")
def convert(file, target_format, output):
    """Regenerate a diagram in another format.

    FILE: Generated diagram file
    """
    config = get_config()
    try:
        converted = convert_diagram(file, DiagramFormat(target_format), config=config)
    except ValueError as e:
        raise click.ClickException(str(e))

    if output:
        Path(output).write_text(converted, encoding="utf-8")
        console.print(f"[green]✓ Wrote {output}[/green]")
    else:
        click.echo(converted, nl=False)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), required=True, help="SVG file to write")
@click.option("--plantuml", "command", default="plantuml", help="PlantUML executable")
def render(file, output, command):
    """Render a PlantUML diagram to SVG.

    FILE: Diagram file (.puml)

    Placeholder paths are expanded to the project root so links in the SVG
    open the local files.
    """
    if format_for_path(file) != DiagramFormat.PLANT_UML:
        raise click.ClickException("Only PlantUML diagrams (.puml) can be rendered")

    service = _open_diagram(file)
    content = service.generate()
    paths = service.config.paths
    if paths.use_project_root:
        content = expand_placeholder(content, paths.resolve_project_root())

    svg = PlantUmlCliRenderer(command=command).render(content)
    if svg is None:
        raise click.ClickException(f"Rendering failed, is '{command}' installed?")

    Path(output).write_text(svg, encoding="utf-8")
    console.print(f"[green]✓ Rendered {output}[/green]")


@main.command()
def config_show():
    """Show current configuration."""
    config = get_config()

    console.print("\n[bold]DrawJavaCalls Configuration[/bold]\n")

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Diagram Format", config.diagram_format.display_name)
    table.add_row("Diagrams Directory", str(config.diagrams_dir))
    table.add_row("Load From Editor", "✓ Yes" if config.load_from_editor else "✗ No")

    console.print(table)

    console.print("\n[bold]Link Paths[/bold]\n")

    paths_table = Table()
    paths_table.add_column("Setting", style="cyan")
    paths_table.add_column("Value", style="green")

    paths_table.add_row("Use $projectsPath", "✓ Yes" if config.paths.use_project_root else "✗ No")
    paths_table.add_row("Project Root", config.paths.project_root or "[dim]Not set[/dim]")
    paths_table.add_row("Custom Root", config.paths.custom_root_path or "[dim]Not set[/dim]")

    console.print(paths_table)


if __name__ == "__main__":
    main()
