from datetime import timedelta

from hypothesis import given, strategies as st

from epoch_date import MILLIS_PER_DAY, epoch_millis_to_local_date, local_date_to_epoch_millis

# 1900-01-01T00:00:00Z .. 2100-01-01T00:00:00Z
MILLIS = st.integers(min_value=-2_208_988_800_000, max_value=4_102_444_800_000)

FIXED_OFFSET_ZONES = ["UTC", "Etc/GMT-14", "Etc/GMT+12", "Etc/GMT-5", "Etc/GMT+3"]
DST_ZONES = ["Europe/Berlin", "America/New_York", "America/Sao_Paulo", "Australia/Lord_Howe"]


@given(millis=MILLIS, zone=st.sampled_from(FIXED_OFFSET_ZONES))
def test_fixed_offset_day_bucket(millis, zone):
    day = epoch_millis_to_local_date(millis, zone)
    start = local_date_to_epoch_millis(day, zone)
    assert 0 <= millis - start < MILLIS_PER_DAY


@given(millis=MILLIS, zone=st.sampled_from(FIXED_OFFSET_ZONES + DST_ZONES))
def test_instant_falls_between_consecutive_day_starts(millis, zone):
    day = epoch_millis_to_local_date(millis, zone)
    start = local_date_to_epoch_millis(day, zone)
    next_start = local_date_to_epoch_millis(day + timedelta(days=1), zone)
    assert start <= millis < next_start


@given(millis=MILLIS, zone=st.sampled_from(FIXED_OFFSET_ZONES + DST_ZONES))
def test_conversion_is_deterministic(millis, zone):
    assert epoch_millis_to_local_date(millis, zone) == epoch_millis_to_local_date(millis, zone)
