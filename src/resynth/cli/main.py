"""Main CLI entry point for resynth."""

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from resynth import __version__
from resynth.analysis.quantize import midi_to_frequency
from resynth.config import Settings, configure

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="resynth")
def main() -> None:
    """resynth - Re-render a monophonic recording with a SoundFont.

    Detects the dominant pitch of the recording about once per second,
    quantizes it to MIDI notes, and plays those notes back through FluidSynth.
    """
    pass


def _analysis_options(func):
    """Options shared by every command that analyzes audio."""
    options = [
        click.option("--fft-size", type=int, help="Analysis frame length in samples (power of two)"),
        click.option(
            "--aggregate-size", type=int, help="Samples per pitch estimate (default: one second)"
        ),
        click.option("--min-freq", type=float, help="Lowest accepted frequency in Hz"),
        click.option("--max-freq", type=float, help="Highest accepted frequency in Hz"),
        click.option(
            "--emit-rests/--drop-silence",
            default=None,
            help="Keep windows without a pitch as silence instead of dropping them",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_settings(**cli_values: object) -> Settings:
    """Build settings from the environment plus any CLI overrides.

    Exits with status 1 when the combined settings are invalid.
    """
    overrides = {key: value for key, value in cli_values.items() if value is not None}
    try:
        return configure(**overrides)
    except ValidationError as e:
        console.print("[red]Error: invalid settings[/red]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            console.print(f"  [red]{field}[/red]: {error['msg']}")
        raise SystemExit(1)


@main.command()
@click.argument("audio_file", type=click.Path(path_type=Path))
@click.argument("output_file", type=click.Path(path_type=Path), required=False)
@click.option(
    "-s",
    "--soundfont",
    type=click.Path(path_type=Path),
    help="SoundFont (.sf2) used to render the notes",
)
@click.option("--velocity", type=int, help="Note-on velocity (1-127)")
@click.option("--bank", type=int, help="SoundFont bank to select")
@click.option("--preset", type=int, help="SoundFont preset to select")
@_analysis_options
def convert(
    audio_file: Path,
    output_file: Path | None,
    soundfont: Path | None,
    velocity: int | None,
    bank: int | None,
    preset: int | None,
    fft_size: int | None,
    aggregate_size: int | None,
    min_freq: float | None,
    max_freq: float | None,
    emit_rests: bool | None,
) -> None:
    """Transcribe AUDIO_FILE and render it with a SoundFont.

    \b
    1. Decode the recording
    2. Load the SoundFont
    3. Estimate one pitch per aggregate window
    4. Quantize pitches to MIDI notes
    5. Render the notes with FluidSynth
    6. Write OUTPUT_FILE in the same format as AUDIO_FILE

    OUTPUT_FILE defaults to <output_dir>/<name>_resynth<ext>.
    """
    from resynth.pipeline import create_default_pipeline

    if not audio_file.exists():
        console.print(f"[red]Error: File not found: {audio_file}[/red]")
        raise SystemExit(1)

    settings = _load_settings(
        soundfont_path=soundfont,
        velocity=velocity,
        bank=bank,
        preset=preset,
        fft_size=fft_size,
        aggregate_size=aggregate_size,
        min_frequency=min_freq,
        max_frequency=max_freq,
        emit_rests=emit_rests,
    )

    if output_file is None:
        output_file = settings.output_dir / f"{audio_file.stem}_resynth{audio_file.suffix}"

    console.print(f"[bold blue]resynth[/bold blue] v{__version__}")
    console.print(f"Processing: [green]{audio_file}[/green]")
    console.print(f"Output: [green]{output_file}[/green]")
    console.print()

    pipeline = create_default_pipeline(settings)
    result = pipeline.run(audio_file, output_file)

    if result.success:
        console.print("[bold green]Processing complete![/bold green]")
        console.print(f"Output: {result.output_path}")
        console.print(f"Notes rendered: {sum(1 for n in result.notes if not n.is_rest)}")
        if result.warnings:
            console.print("[yellow]Warnings:[/yellow]")
            for warning in result.warnings:
                console.print(f"  - {warning}")
    else:
        console.print("[bold red]Processing failed![/bold red]")
        for error in result.errors:
            console.print(f"[red]Error: {error}[/red]")
        raise SystemExit(1)


@main.command()
@click.argument("audio_file", type=click.Path(path_type=Path))
@_analysis_options
def transcribe(
    audio_file: Path,
    fft_size: int | None,
    aggregate_size: int | None,
    min_freq: float | None,
    max_freq: float | None,
    emit_rests: bool | None,
) -> None:
    """Print the note sequence detected in AUDIO_FILE without rendering it."""
    from resynth.pipeline import create_transcription_pipeline

    if not audio_file.exists():
        console.print(f"[red]Error: File not found: {audio_file}[/red]")
        raise SystemExit(1)

    settings = _load_settings(
        fft_size=fft_size,
        aggregate_size=aggregate_size,
        min_frequency=min_freq,
        max_frequency=max_freq,
        emit_rests=emit_rests,
    )

    pipeline = create_transcription_pipeline(settings)
    result = pipeline.run(audio_file)

    if not result.success:
        console.print("[bold red]Transcription failed![/bold red]")
        for error in result.errors:
            console.print(f"[red]Error: {error}[/red]")
        raise SystemExit(1)

    table = Table(title=audio_file.name)
    table.add_column("Start (s)", justify="right")
    table.add_column("Duration (s)", justify="right")
    table.add_column("Frequency (Hz)", justify="right")
    table.add_column("MIDI", justify="right")
    table.add_column("Note")
    table.add_column("Note (Hz)", justify="right")

    for note in result.notes:
        table.add_row(
            f"{note.start:.2f}",
            f"{note.duration:.2f}",
            f"{note.frequency:.1f}" if note.frequency is not None else "-",
            str(note.midi_note) if note.midi_note is not None else "-",
            note.note_name,
            f"{midi_to_frequency(note.midi_note):.1f}" if not note.is_rest else "-",
        )

    console.print(table)
    for warning in result.warnings:
        console.print(f"  - {warning}")


@main.command()
def info() -> None:
    """Show current configuration and synthesis engine availability."""
    settings = _load_settings()

    console.print("[bold]Configuration[/bold]")
    console.print(f"  Output directory: {settings.output_dir}")
    console.print(f"  SoundFont: {settings.soundfont_path or '(not set)'}")
    console.print(f"  Bank/preset: {settings.bank}/{settings.preset}")
    console.print(f"  Expected sample rate: {settings.sample_rate or 'from input'}")
    console.print(f"  FFT size: {settings.fft_size}")
    console.print(f"  Aggregate size: {settings.aggregate_size or 'one second'}")
    console.print(f"  Frequency band: {settings.min_frequency:g}-{settings.max_frequency:g} Hz")
    console.print(f"  Velocity: {settings.velocity}")
    console.print(f"  Channel: {settings.channel}")
    console.print(f"  Emit rests: {settings.emit_rests}")
    console.print()

    console.print("[bold]Synthesis engine[/bold]")
    _check_fluidsynth()


def _check_fluidsynth() -> None:
    """Check if pyfluidsynth and the FluidSynth library can be loaded."""
    try:
        import fluidsynth  # noqa: F401
    except ImportError as e:
        console.print(f"  [red]fluidsynth[/red]: not available ({e})")
        return
    console.print("  [green]fluidsynth[/green]: available")


if __name__ == "__main__":
    main()
