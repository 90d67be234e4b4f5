"""BCRA主要変数カタログ。

``/estadisticas/v4.0/monetarias`` で公開される変数IDと表示名の対応表。
選択肢の列挙と、レスポンス時の ``descripcion`` 解決の双方で使う。
"""

from __future__ import annotations

from dataclasses import dataclass

from bcrastat.config import UNKNOWN_VARIABLE_LABEL


@dataclass(frozen=True, slots=True)
class VariableCatalogEntry:
    """カタログの1項目。

    Attributes:
        value: 変数ID。
        name: 表示名。
    """

    value: int
    name: str


BCRA_VARIABLES: tuple[VariableCatalogEntry, ...] = (
    VariableCatalogEntry(1, "Reservas Internacionales del BCRA (en millones de dólares - cifras provisorias sujetas a cambio de valuación)"),
    VariableCatalogEntry(4, "Tipo de Cambio Minorista ($ por USD) Comunicación B 9791 - Promedio vendedor"),
    VariableCatalogEntry(5, "Tipo de Cambio Mayorista ($ por USD) Comunicación A 3500 - Referencia"),
    VariableCatalogEntry(6, "Tasa de Política Monetaria (en % n.a.)"),
    VariableCatalogEntry(7, "BADLAR en pesos de bancos privados (en % n.a.)"),
    VariableCatalogEntry(8, "TM20 en pesos de bancos privados (en % n.a.)"),
    VariableCatalogEntry(9, "Tasas de interés de las operaciones de pase activas para el BCRA, a 1 día de plazo (en % n.a.)"),
    VariableCatalogEntry(10, "Tasas de interés de las operaciones de pase pasivas para el BCRA, a 1 día de plazo (en % n.a.)"),
    VariableCatalogEntry(11, "Tasas de interés por préstamos entre entidades financiera privadas (BAIBAR) (en % n.a.)"),
    VariableCatalogEntry(12, "Tasas de interés por depósitos a 30 días de plazo en entidades financieras (en % n.a.)"),
    VariableCatalogEntry(13, "Tasa de interés de préstamos por adelantos en cuenta corriente"),
    VariableCatalogEntry(14, "Tasa de interés de préstamos personales"),
    VariableCatalogEntry(15, "Base monetaria - Total (en millones de pesos)"),
    VariableCatalogEntry(16, "Circulación monetaria (en millones de pesos)"),
    VariableCatalogEntry(17, "Billetes y monedas en poder del público (en millones de pesos)"),
    VariableCatalogEntry(18, "Efectivo en entidades financieras (en millones de pesos)"),
    VariableCatalogEntry(19, "Depósitos de los bancos en cta. cte. en pesos en el BCRA (en millones de pesos)"),
    VariableCatalogEntry(21, "Depósitos en efectivo en las entidades financieras - Total (en millones de pesos)"),
    VariableCatalogEntry(22, "En cuentas corrientes (neto de utilización FUCO) (en millones de pesos)"),
    VariableCatalogEntry(23, "En Caja de ahorros (en millones de pesos)"),
    VariableCatalogEntry(24, "A plazo (incluye inversiones y excluye CEDROS) (en millones de pesos)"),
    VariableCatalogEntry(25, "M2 privado, promedio móvil de 30 días, variación interanual (en %)"),
    VariableCatalogEntry(26, "Préstamos de las entidades financieras al sector privado (en millones de pesos)"),
    VariableCatalogEntry(27, "Inflación mensual (variación en %)"),
    VariableCatalogEntry(28, "Inflación interanual (variación en % i.a.)"),
    VariableCatalogEntry(29, "Inflación esperada - REM próximos 12 meses - MEDIANA (variación en % i.a)"),
    VariableCatalogEntry(30, "CER (Base 2.2.2002=1)"),
    VariableCatalogEntry(31, "Unidad de Valor Adquisitivo (UVA) (en pesos -con dos decimales-, base 31.3.2016=14.05)"),
    VariableCatalogEntry(32, "Unidad de Vivienda (UVI) (en pesos -con dos decimales-, base 31.3.2016=14.05)"),
    VariableCatalogEntry(34, "Tasa de Política Monetaria (en % e.a.)"),
    VariableCatalogEntry(35, "BADLAR en pesos de bancos privados (en % e.a.)"),
    VariableCatalogEntry(40, "Índice para Contratos de Locación (ICL-Ley 27.551, con dos decimales, base 30.6.20=1)"),
    VariableCatalogEntry(41, "Tasas de interés de las operaciones de pase pasivas para el BCRA, a 1 día de plazo (en % e.a.)"),
    VariableCatalogEntry(42, "Pases pasivos para el BCRA - Saldos (en millones de pesos)"),
    VariableCatalogEntry(43, "Tasa de interés para uso de la Justicia (Comunicado P 14290 | Base 01/04/1991 (en %)"),
    VariableCatalogEntry(44, "TAMAR en pesos de bancos privados (en % n.a.)"),
    VariableCatalogEntry(45, "TAMAR en pesos de bancos privados (en % e.a.)"),
)

_BY_VALUE = {entry.value: entry for entry in BCRA_VARIABLES}


def get_variable(value: int) -> VariableCatalogEntry | None:
    """変数IDから項目を返す。未収録ならNone。"""

    return _BY_VALUE.get(value)


def is_known_variable(value: int) -> bool:
    """変数IDがカタログに含まれるか。"""

    return value in _BY_VALUE


def variable_label(value: int) -> str:
    """変数IDの表示名を返す。

    Args:
        value: 変数ID。

    Returns:
        表示名。未収録IDは ``UNKNOWN_VARIABLE_LABEL``。
    """

    entry = _BY_VALUE.get(value)
    if entry is None:
        return UNKNOWN_VARIABLE_LABEL
    return entry.name


def variable_options() -> list[dict[str, object]]:
    """選択肢用の ``{value, name}`` 一覧をカタログ順で返す。"""

    return [{"value": entry.value, "name": entry.name} for entry in BCRA_VARIABLES]
