import pytest

from stormrank.models import StormRecord

HEADER = "STATE__,BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP,REMARKS\n"


def make_record(event_type, fatalities=0, injuries=0, prop=(0, ""), crop=(0, ""), row_id=0):
    return StormRecord(
        row_id=row_id,
        event_type=event_type,
        fatalities=float(fatalities),
        injuries=float(injuries),
        prop_dmg=float(prop[0]),
        prop_dmg_exp=prop[1],
        crop_dmg=float(crop[0]),
        crop_dmg_exp=crop[1],
    )


@pytest.fixture
def scenario_records():
    """Three records: two tornado spellings and one flood."""
    return [
        make_record("Tornado", fatalities=1, injuries=2, prop=(10, "K"), crop=(0, ""), row_id=0),
        make_record("tornado!", fatalities=4, injuries=0, prop=(0, "-"), crop=(1, "M"), row_id=1),
        make_record("Flood", fatalities=0, injuries=1, prop=(5, "B"), crop=(0, "?"), row_id=2),
    ]


@pytest.fixture
def storm_csv(tmp_path):
    """A small storm CSV with unused columns and a mix of exponent codes."""
    path = tmp_path / "StormData.csv"
    path.write_text(
        HEADER
        + '1,4/18/1950 0:00:00,TORNADO,1,2,10,K,0,,"first"\n'
        + '1,4/18/1950 0:00:00,Tornado!,4,0,0,-,1,M,"second, with comma"\n'
        + "13,5/1/1951 0:00:00,FLOOD,0,1,5,B,0,?,\n"
        + "13,5/1/1951 0:00:00,TSTM WIND/HAIL,0,0,2,0,3,+,\n",
        encoding="utf-8",
    )
    return path
