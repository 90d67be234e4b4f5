"""CLIエントリポイント。"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from bcrastat.catalog import variable_options
from bcrastat.models import records_to_host, records_to_pandas
from bcrastat.types import OutputRecord


def _require_typer() -> Any:
    try:
        import typer
    except ImportError as exc:
        raise RuntimeError(
            "CLIには typer が必要です。pip install 'bcrastat[cli]' を実行してください。"
        ) from exc
    return typer


def _dump_records(records: list[OutputRecord], out: Path) -> None:
    suffix = out.suffix.lower()
    if suffix == ".json":
        payload = records_to_host(records)
        out.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
        return
    if suffix == ".csv":
        df = records_to_pandas(records)
        df.to_csv(out, index=False)
        return
    raise ValueError("出力拡張子は .json / .csv のみ対応です。")


def _dump_variables(out: Path | None) -> str:
    text = json.dumps(variable_options(), ensure_ascii=False, indent=2)
    if out is not None:
        out.write_text(text, encoding="utf-8")
    return text


def app_entry() -> None:
    """CLIアプリを起動する。"""

    typer = _require_typer()
    from bcrastat import BcraClient

    app = typer.Typer(no_args_is_help=True)

    @app.command("variables")
    def variables_command(
        out: Path | None = typer.Option(None, "--out"),
    ) -> None:
        """変数カタログを出力する。"""

        text = _dump_variables(out)
        if out is None:
            typer.echo(text)

    @app.command("fetch")
    def fetch_command(
        variable: int = typer.Option(..., "--variable"),
        desde: str = typer.Option("", "--desde"),
        hasta: str = typer.Option("", "--hasta"),
        limit: int = typer.Option(100, "--limit", min=1),
        offset: int = typer.Option(0, "--offset", min=0),
        continue_on_fail: bool = typer.Option(False, "--continue-on-fail"),
        verify_tls: bool = typer.Option(False, "--verify-tls"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """1変数の時系列を取得する。"""

        defaults = {
            "idVariable": variable,
            "desde": desde,
            "hasta": hasta,
            "limit": limit,
            "offset": offset,
        }
        with BcraClient(verify_tls=verify_tls, continue_on_fail=continue_on_fail) as client:
            records = client.process([{}], defaults=defaults)
            _dump_records(records, out)

    app()


if __name__ == "__main__":
    app_entry()
