"""Command-line report runner.

This module contains the actual runner, separated from the thin wrapper in
``scripts/``. Installed as the ``milo-report`` console script.

Usage:
    milo-report scripts/user_config.py plate1.csv plate2.csv
    milo-report scripts/user_config.py plate*.csv --output-val area1
    milo-report scripts/user_config.py plate1.csv --base-dir ~/milo_output -v
"""

import argparse
import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from milo.pipeline.orchestrator import ReportOrchestrator
from milo.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig
from milo.setup_directories import setup_output_directories

logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Execute a user config file and return its CONFIG dict, unvalidated.

    The first module attribute whose name starts with ``CONFIG`` and holds
    a dict is used.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing a CONFIG dict.

    Returns
    -------
    dict
        The CONFIG mapping as written by the user.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_milo_report(
    user_config_path: Optional[str],
    inputs: Sequence[str],
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> Path:
    """Resolve configuration and produce one report workbook.

    Parameters
    ----------
    user_config_path : str or None
        Path to user config file (Python file with CONFIG dict). None uses
        expert defaults only.
    inputs : sequence of str
        CSV exports to summarize.
    cli_args : dict, optional
        CLI argument overrides. Keys: base_dir, output_val, output_name,
        log_level. All optional.
    verbose : bool, optional
        If True, enable DEBUG logging and print the resolved config.

    Returns
    -------
    Path
        The written workbook.
    """
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    # Param < User < CLI
    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    output_dirs = setup_output_directories(config.base_dir)

    print(f"\n{'='*60}")
    print("Milo Summary Report")
    print('='*60)
    print(f"Config: {user_config_path or '(defaults)'}")
    print(f"Inputs: {len(inputs)}")
    print(f"Value:  {config.report.output_val}")
    print(f"Output: {output_dirs['reports']}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    orchestrator = ReportOrchestrator(config, output_dirs)
    report_path = orchestrator.run(inputs)
    print(f"Report: {report_path}")
    return report_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize grid measurement CSV exports into a workbook")
    parser.add_argument("config", help="Path to user config file (use '-' for defaults)")
    parser.add_argument("inputs", nargs="+", help="CSV export(s) to summarize")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--output-val", help="Quantity for the Sum and Stats sheets (area1, area2, %%area2)")
    parser.add_argument("--output-name", help="Workbook file name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    run_milo_report(
        None if args.config == "-" else args.config,
        args.inputs,
        cli_args={
            "base_dir": args.base_dir,
            "output_val": args.output_val,
            "output_name": args.output_name,
        },
        verbose=args.verbose,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
