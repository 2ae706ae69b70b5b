"""
Statutory tariff for home-visit massage and acupuncture treatments.

All amounts are yen. The table is built once at import time and never mutated;
every fee computation in the application reads it from here.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

HOT_COMPRESS = "hotCompress"  # 温罨法
HOT_AND_ELECTRIC = "hotAndElectric"  # 温＋電気光線
MANUAL_THERAPY = "manualTherapy"  # 変形徒手
ELECTROTHERAPY = "electrotherapy"  # 電療

MODALITIES = (HOT_COMPRESS, HOT_AND_ELECTRIC, MANUAL_THERAPY, ELECTROTHERAPY)

MIN_AREA_COUNT = 1
MAX_AREA_COUNT = 5
PROCEDURE_COUNTS = (1, 2)


@dataclass(frozen=True)
class FirstVisitFee:
    single: int  # 1術
    combined: int  # 2術 (はり・きゅう併用)

    def for_procedures(self, procedure_count: int) -> int:
        return self.combined if procedure_count == 2 else self.single


@dataclass(frozen=True)
class TariffTable:
    per_area_fee: Mapping[int, int]
    second_procedure_surcharge: int
    modality_fees: Mapping[str, int]
    manual_therapy_fee: Mapping[int, int]
    visit_fee: int
    first_visit_fee: FirstVisitFee

    def area_fee(self, area_count: int) -> int:
        return self.per_area_fee[area_count]

    def manual_therapy(self, area_count: int) -> int:
        """Manual therapy is only priced for 1-4 areas; anything else contributes nothing"""
        return self.manual_therapy_fee.get(area_count, 0)

    def as_dict(self) -> dict:
        return {
            "perAreaFee": dict(self.per_area_fee),
            "secondProcedureSurcharge": self.second_procedure_surcharge,
            "modalityFees": dict(self.modality_fees),
            "manualTherapyFee": dict(self.manual_therapy_fee),
            "visitFee": self.visit_fee,
            "firstVisitFee": {
                "single": self.first_visit_fee.single,
                "combined": self.first_visit_fee.combined,
            },
        }


TARIFF = TariffTable(
    per_area_fee=MappingProxyType({1: 450, 2: 900, 3: 1350, 4: 1800, 5: 2250}),
    second_procedure_surcharge=1770,
    modality_fees=MappingProxyType(
        {
            HOT_COMPRESS: 180,
            HOT_AND_ELECTRIC: 300,
            ELECTROTHERAPY: 100,
        }
    ),
    manual_therapy_fee=MappingProxyType({1: 470, 2: 940, 3: 1410, 4: 1880}),
    visit_fee=2300,
    first_visit_fee=FirstVisitFee(single=1950, combined=2230),
)
