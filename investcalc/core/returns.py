"""Historical annual returns for the supported market indices.

Values are annual decimal returns (0.2411 == 24.11%) keyed by calendar year.
Years outside the table fall back to the index's default return. This is the
only copy of the data: the compounding engine and the market data endpoints
both read from here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from investcalc.core.errors import UnknownIndexError

BASELINE_INDEX = "sp500"
HISTORY_START_YEAR = 1990


@dataclass(frozen=True)
class MarketIndex:
    id: str
    name: str
    default_return: float
    returns: Mapping[int, float] = field(default_factory=dict)

    def annual_return(self, year: int) -> float:
        return self.returns.get(year, self.default_return)

    @property
    def first_year(self) -> int:
        return min(self.returns)

    @property
    def last_year(self) -> int:
        return max(self.returns)


def _index(id: str, name: str, default_return: float, returns: Dict[int, float]) -> MarketIndex:
    return MarketIndex(
        id=id,
        name=name,
        default_return=default_return,
        returns=MappingProxyType(dict(returns)),
    )


_INDICES = (
    _index("sp500", "S&P 500", 0.10, {
        1990: 0.0310, 1991: 0.3047, 1992: 0.0762, 1993: 0.1008, 1994: 0.0132,
        1995: 0.3758, 1996: 0.2296, 1997: 0.3336, 1998: 0.2858, 1999: 0.2104,
        2000: -0.0910, 2001: -0.1189, 2002: -0.2210, 2003: 0.2868, 2004: 0.1088,
        2005: 0.0491, 2006: 0.1579, 2007: 0.0549, 2008: -0.3700, 2009: 0.2646,
        2010: 0.1506, 2011: 0.0211, 2012: 0.1600, 2013: 0.3239, 2014: 0.1369,
        2015: 0.0138, 2016: 0.1196, 2017: 0.2183, 2018: -0.0438, 2019: 0.3157,
        2020: 0.1640, 2021: 0.2689, 2022: -0.1954, 2023: 0.2411, 2024: 0.12,
    }),
    _index("nasdaq", "NASDAQ", 0.115, {
        1990: -0.1746, 1991: 0.5648, 1992: 0.1561, 1993: 0.1456, 1994: -0.0318,
        1995: 0.3963, 1996: 0.2267, 1997: 0.2144, 1998: 0.3969, 1999: 0.8550,
        2000: -0.3910, 2001: -0.2102, 2002: -0.3155, 2003: 0.5015, 2004: 0.0885,
        2005: 0.0135, 2006: 0.0956, 2007: 0.0975, 2008: -0.4018, 2009: 0.4338,
        2010: 0.1694, 2011: -0.0180, 2012: 0.1574, 2013: 0.3848, 2014: 0.1351,
        2015: 0.0559, 2016: 0.0739, 2017: 0.2836, 2018: -0.0356, 2019: 0.3556,
        2020: 0.4391, 2021: 0.2103, 2022: -0.3256, 2023: 0.4381, 2024: 0.115,
    }),
    _index("dow", "Dow Jones", 0.095, {
        1990: 0.0404, 1991: 0.2014, 1992: 0.0421, 1993: 0.1372, 1994: 0.0213,
        1995: 0.3336, 1996: 0.2615, 1997: 0.2275, 1998: 0.1611, 1999: 0.2725,
        2000: -0.0618, 2001: -0.0715, 2002: -0.1693, 2003: 0.2514, 2004: 0.0317,
        2005: -0.0061, 2006: 0.1606, 2007: 0.0626, 2008: -0.3394, 2009: 0.1876,
        2010: 0.1102, 2011: 0.0554, 2012: 0.0726, 2013: 0.2654, 2014: 0.0751,
        2015: -0.0234, 2016: 0.1342, 2017: 0.2517, 2018: -0.0587, 2019: 0.2234,
        2020: 0.0725, 2021: 0.1885, 2022: -0.0856, 2023: 0.1397, 2024: 0.095,
    }),
    _index("russell2000", "Russell 2000", 0.092, {
        1990: -0.1949, 1991: 0.4621, 1992: 0.1835, 1993: 0.2109, 1994: -0.0185,
        1995: 0.2875, 1996: 0.1643, 1997: 0.2236, 1998: -0.0251, 1999: 0.2123,
        2000: -0.0303, 2001: 0.0249, 2002: -0.2044, 2003: 0.4741, 2004: 0.1825,
        2005: 0.0484, 2006: 0.1837, 2007: -0.0157, 2008: -0.3349, 2009: 0.2746,
        2010: 0.2688, 2011: -0.0412, 2012: 0.1609, 2013: 0.3870, 2014: 0.0489,
        2015: -0.0441, 2016: 0.2123, 2017: 0.1449, 2018: -0.1151, 2019: 0.2517,
        2020: 0.1994, 2021: 0.1462, 2022: -0.2044, 2023: 0.1665, 2024: 0.092,
    }),
    _index("ftse100", "FTSE 100", 0.075, {
        1990: -0.0935, 1991: 0.1634, 1992: 0.1985, 1993: 0.2834, 1994: -0.0954,
        1995: 0.2034, 1996: 0.1185, 1997: 0.2485, 1998: 0.1434, 1999: 0.1785,
        2000: -0.1034, 2001: -0.1385, 2002: -0.2485, 2003: 0.1385, 2004: 0.0785,
        2005: 0.1634, 2006: 0.1034, 2007: 0.0385, 2008: -0.3134, 2009: 0.2234,
        2010: 0.0934, 2011: -0.0585, 2012: 0.0585, 2013: 0.1434, 2014: -0.0234,
        2015: -0.0485, 2016: 0.1434, 2017: 0.0734, 2018: -0.1234, 2019: 0.1234,
        2020: -0.1434, 2021: 0.1434, 2022: 0.0034, 2023: 0.0384, 2024: 0.075,
    }),
    _index("nikkei225", "Nikkei 225", 0.085, {
        1990: -0.3834, 1991: 0.0434, 1992: -0.2634, 1993: 0.0334, 1994: 0.1334,
        1995: -0.0134, 1996: -0.0334, 1997: -0.2134, 1998: -0.0934, 1999: 0.3634,
        2000: -0.2734, 2001: -0.2334, 2002: -0.1834, 2003: 0.2434, 2004: 0.0734,
        2005: 0.4034, 2006: 0.0634, 2007: -0.1134, 2008: -0.4234, 2009: 0.1934,
        2010: -0.0334, 2011: -0.1734, 2012: 0.2284, 2013: 0.5684, 2014: -0.0834,
        2015: 0.0934, 2016: -0.0234, 2017: 0.1934, 2018: -0.1234, 2019: 0.1834,
        2020: 0.1634, 2021: 0.0434, 2022: -0.0934, 2023: 0.2834, 2024: 0.095,
    }),
)

MARKET_INDICES: Mapping[str, MarketIndex] = MappingProxyType({index.id: index for index in _INDICES})


def get_index(key: str, table: Optional[Mapping[str, MarketIndex]] = None) -> MarketIndex:
    table = MARKET_INDICES if table is None else table
    try:
        return table[key]
    except KeyError:
        raise UnknownIndexError(key) from None


def resolve_index(
    key: str,
    table: Optional[Mapping[str, MarketIndex]] = None,
    fallback: Optional[str] = BASELINE_INDEX,
) -> MarketIndex:
    """Return ``key``'s entry, or the fallback index's entry when ``key`` is missing.

    Raises ``UnknownIndexError`` naming the requested key when neither exists.
    """
    table = MARKET_INDICES if table is None else table
    if key in table:
        return table[key]
    if fallback is not None and fallback in table:
        return table[fallback]
    raise UnknownIndexError(key)


def list_indices(table: Optional[Mapping[str, MarketIndex]] = None) -> List[Dict[str, object]]:
    table = MARKET_INDICES if table is None else table
    return [
        {"id": index.id, "name": index.name, "averageReturn": index.default_return}
        for index in table.values()
    ]
