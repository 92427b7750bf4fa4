"""Command line entry point for the Tekton Dashboard client."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich import print as rich_print
from rich.logging import RichHandler
from rich.table import Table

from .addressing import ALL_NAMESPACES, AddressResolver, NamespaceLike, label_selector_query
from .api import DashboardAPI
from .config import DashboardContext
from .manifest import dump_manifest, load_manifest
from .operations.cluster import ClusterOperations
from .operations.extensions import ExtensionOperations
from .operations.pipelines import PipelineOperations, summarise_run
from .operations.tasks import TaskOperations
from .resources.pipeline_run import PipelineRunConfig

app = typer.Typer(help="Access Tekton resources through the Tekton Dashboard API.")

url_app = typer.Typer(help="Print resolved request URLs without contacting the server.")
app.add_typer(url_app, name="url")

pipelinerun_app = typer.Typer(help="Inspect and control PipelineRuns.")
app.add_typer(pipelinerun_app, name="pipelinerun")

pipelineresource_app = typer.Typer(help="Manage PipelineResources.")
app.add_typer(pipelineresource_app, name="pipelineresource")

taskrun_app = typer.Typer(help="Inspect and control TaskRuns.")
app.add_typer(taskrun_app, name="taskrun")

namespace_app = typer.Typer(help="Namespace helpers.")
app.add_typer(namespace_app, name="namespace")

extension_app = typer.Typer(help="Dashboard extension discovery.")
app.add_typer(extension_app, name="extension")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, log_time_format="%X")],
    )


def _create_api(context: DashboardContext) -> DashboardAPI:
    return DashboardAPI(context)


def _context(ctx: typer.Context) -> DashboardContext:
    return ctx.obj if isinstance(ctx.obj, DashboardContext) else DashboardContext()


def _scope(namespace: Optional[str], all_namespaces: bool) -> NamespaceLike:
    return ALL_NAMESPACES if all_namespaces else namespace


@app.callback()
def main(
    ctx: typer.Context,
    api_root: Optional[str] = typer.Option(None, "--api-root", help="Dashboard URL, e.g. http://localhost:9097."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML connection config."),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Default namespace ('*' for all)."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)
    context = DashboardContext.from_file(config_path) if config_path else DashboardContext()
    overrides: Dict[str, Any] = {}
    if api_root:
        overrides["api_root"] = api_root
    if namespace:
        overrides["namespace"] = namespace
    if overrides:
        context = DashboardContext.model_validate({**context.model_dump(), **overrides})
    ctx.obj = context


@url_app.command("tekton")
def url_tekton(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="Plural resource kind, e.g. pipelineruns."),
    name: str = typer.Argument("", help="Resource name; omit for the collection URL."),
    label: List[str] = typer.Option([], "--label", "-l", help="Label selector filter, repeatable."),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="Address every namespace."),
) -> None:
    """Print the URL of a Tekton resource."""

    context = _context(ctx)
    resolver = AddressResolver(context.api_root)
    typer.echo(
        resolver.build_tekton_url(
            kind,
            name=name,
            namespace=_scope(context.namespace, all_namespaces),
            query=label_selector_query(label),
        )
    )


@url_app.command("core")
def url_core(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="Plural resource kind, e.g. pods."),
    name: str = typer.Argument("", help="Resource name; omit for the collection URL."),
    sub_resource: Optional[str] = typer.Option(None, "--sub-resource", help="Sub-resource such as log."),
    label: List[str] = typer.Option([], "--label", "-l", help="Label selector filter, repeatable."),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="Address every namespace."),
) -> None:
    """Print the URL of a Kubernetes core resource."""

    context = _context(ctx)
    resolver = AddressResolver(context.api_root)
    typer.echo(
        resolver.build_kube_core_url(
            kind,
            name=name,
            namespace=_scope(context.namespace, all_namespaces),
            sub_resource=sub_resource,
            query=label_selector_query(label),
        )
    )


@url_app.command("group")
def url_group(
    ctx: typer.Context,
    group: str = typer.Argument(..., help="API group, e.g. triggers.tekton.dev."),
    version: str = typer.Argument(..., help="API version, e.g. v1alpha1."),
    kind: str = typer.Argument(..., help="Plural resource kind."),
    name: str = typer.Argument("", help="Resource name; omit for the collection URL."),
    label: List[str] = typer.Option([], "--label", "-l", help="Label selector filter, repeatable."),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="Address every namespace."),
) -> None:
    """Print the URL of a custom resource in any API group."""

    context = _context(ctx)
    resolver = AddressResolver(context.api_root)
    typer.echo(
        resolver.build_kube_group_url(
            group,
            version,
            kind,
            name=name,
            namespace=_scope(context.namespace, all_namespaces),
            query=label_selector_query(label),
        )
    )


@url_app.command("dashboard")
def url_dashboard(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="Dashboard endpoint, e.g. rerun."),
    name: str = typer.Argument("", help="Resource name."),
) -> None:
    """Print the URL of a dashboard-native endpoint."""

    context = _context(ctx)
    typer.echo(AddressResolver(context.api_root).build_dashboard_url(kind, name=name, namespace=context.namespace))


@url_app.command("bundle")
def url_bundle(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Extension name."),
    bundle_location: str = typer.Argument(..., help="Bundle location relative to the extension."),
) -> None:
    """Print the URL of a bundle-based extension."""

    typer.echo(AddressResolver(_context(ctx).api_root).build_extension_bundle_url(name, bundle_location))


@url_app.command("websocket")
def url_websocket(ctx: typer.Context) -> None:
    """Print the resource websocket URL."""

    typer.echo(AddressResolver(_context(ctx).api_root).build_websocket_url())


def _runs_table(title: str, runs: List[Dict[str, Any]]) -> Table:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Namespace")
    table.add_column("Status")
    table.add_column("Reason")
    table.add_column("Start")
    table.add_column("Completion")

    for run in (summarise_run(item) for item in runs):
        table.add_row(
            str(run.get("name") or ""),
            str(run.get("namespace") or ""),
            str(run.get("status") or ""),
            str(run.get("reason") or ""),
            str(run.get("startTime") or ""),
            str(run.get("completionTime") or ""),
        )
    return table


@pipelinerun_app.command("list")
def pipelinerun_list(
    ctx: typer.Context,
    label: List[str] = typer.Option([], "--label", "-l", help="Label selector filter, repeatable."),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="List across every namespace."),
) -> None:
    """List PipelineRuns."""

    context = _context(ctx)
    pipeline_ops = PipelineOperations(_create_api(context), context)
    runs = pipeline_ops.list_pipeline_runs(namespace=_scope(context.namespace, all_namespaces), filters=label)
    rich_print(_runs_table("PipelineRuns", runs))


@pipelinerun_app.command("get")
def pipelinerun_get(ctx: typer.Context, name: str = typer.Argument(..., help="PipelineRun name.")) -> None:
    """Print a PipelineRun as YAML."""

    context = _context(ctx)
    pipeline_ops = PipelineOperations(_create_api(context), context)
    typer.echo(dump_manifest(pipeline_ops.get_pipeline_run(name)))


@pipelinerun_app.command("cancel")
def pipelinerun_cancel(ctx: typer.Context, name: str = typer.Argument(..., help="PipelineRun name.")) -> None:
    """Cancel a running PipelineRun."""

    context = _context(ctx)
    PipelineOperations(_create_api(context), context).cancel_pipeline_run(name)
    rich_print(f"[green]Cancelled PipelineRun {name}.[/green]")


@pipelinerun_app.command("delete")
def pipelinerun_delete(ctx: typer.Context, name: str = typer.Argument(..., help="PipelineRun name.")) -> None:
    """Delete a PipelineRun."""

    context = _context(ctx)
    PipelineOperations(_create_api(context), context).delete_pipeline_run(name)
    rich_print(f"[green]Deleted PipelineRun {name}.[/green]")


def _parse_pairs(values: List[str], option: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for value in values:
        key, separator, item = value.partition("=")
        if not separator or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{value}'.", param_hint=option)
        pairs[key] = item
    return pairs


@pipelinerun_app.command("create")
def pipelinerun_create(
    ctx: typer.Context,
    pipeline_name: str = typer.Argument(..., help="Pipeline to run."),
    param: List[str] = typer.Option([], "--param", "-p", help="Pipeline parameter as NAME=VALUE."),
    resource: List[str] = typer.Option([], "--resource", "-r", help="Resource binding as NAME=PIPELINERESOURCE."),
    label: List[str] = typer.Option([], "--label", "-l", help="Extra label as KEY=VALUE."),
    service_account: Optional[str] = typer.Option(None, "--service-account", help="ServiceAccount for the run."),
    timeout: Optional[str] = typer.Option(None, "--timeout", help="Run timeout, e.g. 1h0m0s."),
) -> None:
    """Start a new PipelineRun for an existing Pipeline."""

    context = _context(ctx)
    cfg = PipelineRunConfig(
        pipeline_name=pipeline_name,
        namespace=context.namespace,
        params=_parse_pairs(param, "--param"),
        resources=_parse_pairs(resource, "--resource"),
        labels=_parse_pairs(label, "--label"),
        service_account=service_account,
        timeout=timeout,
    )
    created = PipelineOperations(_create_api(context), context).create_pipeline_run(cfg)
    created_name = (created or {}).get("metadata", {}).get("name", pipeline_name)
    rich_print(f"[green]Created PipelineRun {created_name}.[/green]")


@pipelineresource_app.command("create")
def pipelineresource_create(
    ctx: typer.Context,
    manifest_path: Path = typer.Option(..., "--filename", "-f", help="PipelineResource manifest (YAML)."),
) -> None:
    """Create a PipelineResource from a manifest file."""

    context = _context(ctx)
    definition = load_manifest(manifest_path)
    PipelineOperations(_create_api(context), context).create_pipeline_resource(definition)
    rich_print(f"[green]Created PipelineResource {definition.name}.[/green]")


@pipelineresource_app.command("delete")
def pipelineresource_delete(ctx: typer.Context, name: str = typer.Argument(..., help="PipelineResource name.")) -> None:
    """Delete a PipelineResource."""

    context = _context(ctx)
    PipelineOperations(_create_api(context), context).delete_pipeline_resource(name)
    rich_print(f"[green]Deleted PipelineResource {name}.[/green]")


@taskrun_app.command("list")
def taskrun_list(
    ctx: typer.Context,
    label: List[str] = typer.Option([], "--label", "-l", help="Label selector filter, repeatable."),
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="List across every namespace."),
) -> None:
    """List TaskRuns."""

    context = _context(ctx)
    task_ops = TaskOperations(_create_api(context), context)
    runs = task_ops.list_task_runs(namespace=_scope(context.namespace, all_namespaces), filters=label)
    rich_print(_runs_table("TaskRuns", runs))


@taskrun_app.command("cancel")
def taskrun_cancel(ctx: typer.Context, name: str = typer.Argument(..., help="TaskRun name.")) -> None:
    """Cancel a running TaskRun."""

    context = _context(ctx)
    TaskOperations(_create_api(context), context).cancel_task_run(name)
    rich_print(f"[green]Cancelled TaskRun {name}.[/green]")


@taskrun_app.command("delete")
def taskrun_delete(ctx: typer.Context, name: str = typer.Argument(..., help="TaskRun name.")) -> None:
    """Delete a TaskRun."""

    context = _context(ctx)
    TaskOperations(_create_api(context), context).delete_task_run(name)
    rich_print(f"[green]Deleted TaskRun {name}.[/green]")


@app.command("logs")
def logs(
    ctx: typer.Context,
    pod: str = typer.Argument(..., help="Pod backing the TaskRun step."),
    container: Optional[str] = typer.Option(None, "--container", "-c", help="Container (step) name."),
) -> None:
    """Print the log of a pod container."""

    context = _context(ctx)
    task_ops = TaskOperations(_create_api(context), context)
    typer.echo(task_ops.get_pod_log(pod, container=container) or "")


@namespace_app.command("list")
def namespace_list(ctx: typer.Context) -> None:
    """List namespaces visible through the dashboard."""

    context = _context(ctx)
    for item in ClusterOperations(_create_api(context), context).list_namespaces():
        typer.echo(item.get("metadata", {}).get("name", ""))


@extension_app.command("list")
def extension_list(ctx: typer.Context) -> None:
    """List extensions from both the bundle and resource registries."""

    context = _context(ctx)
    extensions = ExtensionOperations(_create_api(context), context).list_extensions()

    table = Table(title="Dashboard extensions")
    table.add_column("Name")
    table.add_column("Display name")
    table.add_column("Type")
    table.add_column("Location")

    for extension in extensions:
        if extension.is_bundle:
            table.add_row(extension.name or "", extension.display_name or "", "bundle", extension.source or "")
        else:
            table.add_row(
                extension.name or "",
                extension.display_name or "",
                extension.extension_type or "",
                f"{extension.api_group}/{extension.api_version}",
            )

    rich_print(table)
