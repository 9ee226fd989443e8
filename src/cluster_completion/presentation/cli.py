"""Typer-based command line front end used by the shell completion hook."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from cluster_completion.application.dispatch import CompletionDispatcher, build_default_dispatcher
from cluster_completion.application.suggestions import matching_prefix
from cluster_completion.config import CompletionSettings, load_settings
from cluster_completion.domain.protocols import ClusterClient
from cluster_completion.domain.types import (
    ArgumentStateBuilder,
    Completion,
    DEFAULT_VALUE_FLAGS,
    SessionScope,
)
from cluster_completion.infrastructure import InMemoryClusterClient
from cluster_completion.logger import get_logger, setup_logger

logger = get_logger("cli")

cli = typer.Typer(
    name="cluster-complete",
    help="Shell completion engine for cluster-facing developer CLIs",
    epilog="""
    Examples:
    $ cluster-complete complete --last my -- service create mysql-persistent --plan
    $ cluster-complete script --prog devctl >> ~/.bashrc
    """,
    add_completion=False,
)

BASH_HOOK = """# bash completion for {prog}, generated by cluster-complete
_{func}_complete() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local prefix=""
    # bash splits --flag=value at "="; the reply must keep a lone "=" word
    [[ $cur == "=" ]] && prefix="="
    local IFS=$'\\n'
    COMPREPLY=( $(cluster-complete complete --last="$cur" -- "${{COMP_WORDS[@]:1:COMP_CWORD-1}}" 2>/dev/null) )
    COMPREPLY=( "${{COMPREPLY[@]/#/$prefix}}" )
}}
complete -o default -F _{func}_complete {prog}
"""


def split_command_line(words: Sequence[str], commands: Sequence[str]) -> tuple[str, list[str]] | None:
    """
    Find the registered command the words belong to.

    The longest registered command whose words prefix the positional words
    wins. The returned word list starts at the leaf subcommand, which is
    what :class:`ArgumentState` expects.

    Examples:
        ['service', 'create', 'mysql'] -> ('service create', ['create', 'mysql'])
        ['link'] -> ('link', ['link'])

    Args:
        words: Completed words after the program name
        commands: Registered command paths

    Returns:
        (command path, leaf words) or None when no command matches
    """
    best: list[str] | None = None
    for command in commands:
        parts = command.split()
        if list(words[: len(parts)]) == parts and (best is None or len(parts) > len(best)):
            best = parts
    if best is None:
        return None
    return " ".join(best), list(words[len(best) - 1 :])


def _unquote(word: str) -> str:
    if len(word) >= 2 and word[0] == word[-1] and word[0] in "\"'":
        return word[1:-1]
    return word


def _is_bare_long_flag(word: str) -> bool:
    return len(word) > 2 and word.startswith("--") and "=" not in word


def join_shell_words(words: Sequence[str], last: str) -> tuple[list[str], str]:
    """
    Undo the word splitting bash applies to ``--flag=value``.

    ``=`` is in ``COMP_WORDBREAKS``, so bash hands over ``--plan=default`` as
    ``--plan``, ``=``, ``default``. Quoted words arrive with their quotes.

    Examples:
        ['--plan', '=', 'default'], ''  -> (['--plan=default'], '')
        ['--plan', '='], 'de'           -> ([], '--plan=de')
        ['--plan'], '='                 -> ([], '--plan=')
        ['--parameters', '"[A, B]"'], '' -> (['--parameters', '[A, B]'], '')

    Returns:
        (joined words, word under the cursor)
    """
    joined: list[str] = []
    value_pending = False
    for word in words:
        word = _unquote(word)
        if value_pending:
            joined[-1] += word
            value_pending = False
        elif word == "=" and joined and _is_bare_long_flag(joined[-1]):
            joined[-1] += "="
            value_pending = True
        else:
            joined.append(word)

    if value_pending:
        last = joined.pop() + last
    elif last == "=" and joined and _is_bare_long_flag(joined[-1]):
        last = joined.pop() + "="
    return joined, last


def detect_flag(words: list[str], last: str) -> tuple[list[str], Optional[str], str]:
    """
    Work out whether a flag value is being completed.

    ``--plan <TAB>`` leaves ``--plan`` as the last completed word, while
    ``--plan=de<TAB>`` puts the flag into the word under the cursor.

    Returns:
        (remaining words, flag name or None, text typed for the value)
    """
    if last.startswith("--") and "=" in last:
        name, _, value = last[2:].partition("=")
        return words, name, value
    if words and words[-1].startswith("--"):
        name = words[-1][2:]
        if name in DEFAULT_VALUE_FLAGS:
            return words[:-1], name, last
    return words, None, last


def _leaf_index(words: Sequence[str], command_length: int) -> int:
    """Index of the leaf subcommand, i.e. the ``command_length``-th positional word."""
    seen = 0
    for index, word in enumerate(words):
        if word.startswith("-"):
            continue
        seen += 1
        if seen == command_length:
            return index
    return 0


def build_client(settings: CompletionSettings, snapshot: Optional[Path] = None) -> ClusterClient:
    if snapshot is not None:
        with open(snapshot, "r", encoding="utf-8") as f:
            return InMemoryClusterClient.from_snapshot(json.load(f))

    # Imported here so the snapshot mode works without a kubeconfig
    from cluster_completion.infrastructure.kubernetes import KubernetesClusterClient

    return KubernetesClusterClient(
        kubeconfig=settings.kubeconfig,
        context=settings.kube_context,
        request_timeout=settings.request_timeout,
    )


def resolve_words(
    dispatcher: CompletionDispatcher,
    words: Sequence[str],
    last: str,
    scope: SessionScope,
    command: Optional[str] = None,
    flag: Optional[str] = None,
) -> tuple[Completion, str]:
    """
    Run the dispatcher for a raw word list.

    Returns:
        The completion and the text typed so far for the completed argument
    """
    words, last = join_shell_words(words, last)
    if flag is None:
        words, flag, last = detect_flag(words, last)

    if command is None:
        split = split_command_line([word for word in words if not word.startswith("-")], dispatcher.commands)
        if split is None:
            return Completion.absent(), last
        command, _ = split
        words = words[_leaf_index(words, len(command.split())) :]
    elif not words:
        words = [command.split()[-1]]

    state = ArgumentStateBuilder.from_words(words, last=last)
    return dispatcher.dispatch(command, state, scope, flag=flag), last


@cli.command()
def complete(
    words: Optional[List[str]] = typer.Argument(None, help="Completed words after the program name"),
    last: str = typer.Option("", "--last", help="Word under the cursor"),
    command: Optional[str] = typer.Option(None, "--command", help="Command path; inferred from WORDS when omitted"),
    flag: Optional[str] = typer.Option(None, "--flag", help="Flag whose value is completed"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace (project)"),
    application: Optional[str] = typer.Option(None, "--app", help="Application name"),
    component: Optional[str] = typer.Option(None, "--component", help="Current component"),
    kube_context: Optional[str] = typer.Option(None, "--context", help="kubeconfig context"),
    config: Optional[Path] = typer.Option(None, "--config", help="JSON settings file"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", help="Serve resources from a JSON snapshot"),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level"),
):
    """Print completion candidates, one per line.

    Never fails: any problem results in no output and exit status 0.
    """
    try:
        settings = load_settings(
            config,
            overrides={
                "namespace": namespace,
                "application": application,
                "component": component,
                "kube_context": kube_context,
                "log_level": "DEBUG" if debug else None,
            },
        )
        setup_logger(log_file=settings.log_file, log_level=settings.log_level)
        scope = SessionScope(settings.namespace, settings.application, settings.component)
        dispatcher = build_default_dispatcher(build_client(settings, snapshot))

        completion, typed = resolve_words(dispatcher, words or [], last, scope, command=command, flag=flag)
        for value in matching_prefix(completion.values, typed):
            typer.echo(value)
    except Exception:
        logger.exception("Completion failed")


@cli.command()
def script(
    prog: str = typer.Option("devctl", "--prog", help="Name of the CLI to complete"),
):
    """Print a bash completion hook for PROG."""
    func = "".join(char if char.isalnum() else "_" for char in prog)
    typer.echo(BASH_HOOK.format(prog=prog, func=func), nl=False)
