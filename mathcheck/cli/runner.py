"""CLI runner for executing the pipeline."""

from pathlib import Path

import yaml  # type: ignore
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mathcheck.agents.prompts import format_number
from mathcheck.models.config import PipelineConfig, default_config
from mathcheck.orchestration.pipeline import PipelineResult, VerificationPipeline
from mathcheck.tools.base import ToolResult
from mathcheck.tools.calculator import CalculatorTool


def load_config(config_path: str | None, output_dir: str | None = None) -> PipelineConfig:
    """Load pipeline configuration from YAML, or the built-in defaults.

    Args:
        config_path: Path to pipeline configuration YAML, or None for defaults
        output_dir: Optional trajectory output directory (overrides config)

    Returns:
        PipelineConfig

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    if config_path is None:
        config = default_config()
        if output_dir:
            config.trajectory_output_dir = output_dir
        return config

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file) as f:
        config_data = yaml.safe_load(f) or {}

    if output_dir:
        config_data["trajectory_output_dir"] = output_dir

    return PipelineConfig(**config_data)


async def run_single(
    config_path: str | None,
    question: str | None = None,
    output_dir: str | None = None,
) -> PipelineResult:
    """Run one worker → verifier pipeline execution.

    Args:
        config_path: Path to pipeline configuration YAML (None for defaults)
        question: Question to solve; falls back to the configured question
        output_dir: Optional trajectory output directory (overrides config)

    Returns:
        PipelineResult with execution details
    """
    config = load_config(config_path, output_dir)
    pipeline = VerificationPipeline(config)
    return await pipeline.run(question)


def run_calc(expression: str) -> ToolResult:
    """Evaluate an expression through the calculate tool contract.

    Args:
        expression: Arithmetic expression

    Returns:
        ToolResult as the worker would receive it
    """
    return CalculatorTool().execute({"expression": expression})


def display_result(result: PipelineResult, console: Console) -> None:
    """Display worker answer and verifier verdict.

    The verdict text is printed verbatim, with no markup or highlighting.

    Args:
        result: PipelineResult to display
        console: Rich Console instance
    """
    question_display = result.question
    if len(question_display) > 200:
        question_display = question_display[:197] + "..."

    if result.coercion_defaulted:
        answer_text = f"[yellow]{format_number(result.worker_answer.value)} (default)[/yellow]"
    else:
        answer_text = f"[bold]{format_number(result.worker_answer.value)}[/bold]"

    if result.verdict is None:
        verdict_status = "[yellow]UNSTRUCTURED[/yellow]"
    elif result.verdict.is_correct:
        verdict_status = "[green]✓ CORRECT[/green]"
    else:
        verdict_status = "[red]✗ INCORRECT[/red]"

    info_lines = [
        f"[bold]Question:[/bold] {escape(question_display)}",
        f"[bold]Worker Answer:[/bold] {answer_text}",
        f"[bold]Verdict:[/bold] {verdict_status}",
        f"[bold]Total Cost:[/bold] ${result.total_cost:.6f}",
    ]
    if result.trajectory_path:
        info_lines.append(f"[bold]Trajectory:[/bold] {result.trajectory_path}")

    console.print(Panel("\n".join(info_lines), title="Pipeline Result", expand=False))

    by_agent = result.cost_summary.get("by_agent", {})
    if by_agent:
        agent_table = Table(title="Per-Agent Token and Cost Breakdown", show_header=True)
        agent_table.add_column("Agent", style="cyan")
        agent_table.add_column("Prompt Tokens", justify="right")
        agent_table.add_column("Completion Tokens", justify="right")
        agent_table.add_column("Total Tokens", justify="right")
        agent_table.add_column("Cost (USD)", justify="right")

        for agent_name in ["worker", "verifier"]:
            if agent_name in by_agent:
                tokens = by_agent[agent_name]["tokens"]
                cost = by_agent[agent_name]["cost_usd"]
                agent_table.add_row(
                    agent_name.capitalize(),
                    f"{tokens['prompt_tokens']:,}",
                    f"{tokens['completion_tokens']:,}",
                    f"{tokens['total_tokens']:,}",
                    f"${cost:.6f}",
                )

        console.print(agent_table)

    console.print("\n[bold]Verifier Result:[/bold]")
    console.print(result.verdict_text, markup=False, highlight=False, soft_wrap=True)
