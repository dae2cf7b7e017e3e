import pandas as pd
import pytest

import sample_events
from weatherevents.data_loader import read_events_csv


def test_filter_chunk_by_state_and_year(raw_events):
    raw = raw_events.copy()
    raw.loc[0, "StartTime(UTC)"] = "2020-03-01 00:00:00"
    kept = sample_events.filter_chunk(raw, states=["MA", "WA"], years=[2019])
    assert set(kept["State"]) == {"MA", "WA"}
    assert 0 not in kept.index
    assert len(kept) == 119


def test_collect_rows_reads_in_chunks(events_csv):
    rows = sample_events.collect_rows(events_csv, states=["IL"], chunk_size=50)
    assert len(rows) == 60
    assert (rows["AirportCode"] == "KORD").all()


def test_collect_rows_rejects_wrong_file(tmp_path):
    path = tmp_path / "other.csv"
    pd.DataFrame({"a": [1, 2]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="missing columns"):
        sample_events.collect_rows(str(path))


def test_draw_sample_is_reproducible(raw_events):
    a = sample_events.draw_sample(raw_events, n_rows=50, seed=7)
    b = sample_events.draw_sample(raw_events, n_rows=50, seed=7)
    assert len(a) == 50
    assert a["EventId"].tolist() == b["EventId"].tolist()
    assert a.index.is_monotonic_increasing


def test_draw_sample_keeps_everything_when_asked_for_more(raw_events):
    out = sample_events.draw_sample(raw_events, n_rows=10_000)
    assert len(out) == len(raw_events)


def test_main_writes_readable_sample(events_csv, tmp_path):
    out = tmp_path / "data" / "sample.csv"
    sample = sample_events.main([events_csv, "-o", str(out), "-n", "100", "--seed", "3"])
    assert len(sample) == 100
    written = read_events_csv(str(out))
    assert len(written) == 100
    assert written["ZipCode"].str.len().eq(5).all()
