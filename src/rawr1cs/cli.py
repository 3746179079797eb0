import json, logging
import importlib
import click
from pathlib import Path

from rawr1cs.core.constraint_system import SynthesisError
from rawr1cs.core.export import BN254_PRIME, export_circuit, dump_matrices, to_r1cs_json, summarize_export
from rawr1cs.circuits.examples import CIRCUITS

def resolve_circuit(ref: str):
    """Bundled circuit name, or `module:attr` (classes are instantiated with no args)."""
    if ref in CIRCUITS:
        return CIRCUITS[ref]()
    if ":" not in ref:
        raise click.BadParameter(
            f"unknown circuit {ref!r}; use one of {', '.join(sorted(CIRCUITS))} or module:attr",
            param_hint="--circuit")
    mod_name, attr = ref.split(":", 1)
    try:
        obj = getattr(importlib.import_module(mod_name), attr)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"cannot load {ref!r}: {e}", param_hint="--circuit")
    return obj() if isinstance(obj, type) else obj

def _export(ref: str):
    circuit = resolve_circuit(ref)
    try:
        return export_circuit(circuit)
    except SynthesisError as e:
        raise click.ClickException(f"circuit synthesis failed: {e}")

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def cli(verbose):
    """rawr1cs command line interface"""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("rawr1cs").setLevel(level)

@cli.command(name="export")
@click.option("--circuit", "circuit_ref", required=True,
              help="Bundled circuit name or module:attr")
@click.option("--format", "fmt", type=click.Choice(["dump", "json"]), default="dump", show_default=True)
@click.option("--prime", default=BN254_PRIME, type=click.IntRange(min=2), show_default=True,
              help="Field modulus used to write JSON coefficients")
@click.option("--out", "out_path", type=click.Path(dir_okay=False), required=False)
def export_cmd(circuit_ref, fmt, prime, out_path):
    """Export a circuit's A/B/C matrices."""
    ex = _export(circuit_ref)
    if fmt == "dump":
        lines = []
        dump_matrices(ex, echo=lines.append)
        s = "\n".join(lines)
    else:
        s = json.dumps(to_r1cs_json(ex, prime), indent=2)
    if out_path:
        outp = Path(out_path)
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_text(s + "\n")
    else:
        click.echo(s)

@cli.command(name="summary")
@click.option("--circuit", "circuit_ref", required=True,
              help="Bundled circuit name or module:attr")
def summary_cmd(circuit_ref):
    """Structural summary of an exported circuit."""
    ex = _export(circuit_ref)
    summary = summarize_export(ex)
    summary["circuit_id"] = circuit_ref
    click.echo(json.dumps(summary, indent=2))

@cli.command(name="circuits")
def circuits_cmd():
    """List bundled circuits."""
    for name in sorted(CIRCUITS):
        click.echo(name)

def main():
    cli()

if __name__ == "__main__":
    main()
