import pytest

from tubefinder.services.ratio import BUCKET_BOUNDS, classify, in_buckets


class TestClassify:
    @pytest.mark.parametrize("ratio,bucket", [
        (0, 1),
        (0.1999, 1),
        (0.2, 2),
        (0.5999999, 2),
        (0.6, 3),
        (1.3999, 3),
        (1.4, 4),
        (2.999, 4),
        (3.0, 5),
        (100, 5),
    ])
    def test_boundaries(self, ratio, bucket):
        assert classify(ratio) == bucket

    def test_every_ratio_lands_in_exactly_one_bucket(self):
        for step in range(0, 5000):
            ratio = step / 1000
            matching = [
                bucket for bucket, (lower, upper) in BUCKET_BOUNDS.items()
                if ratio >= lower and (upper is None or ratio < upper)
            ]
            assert matching == [classify(ratio)]

    def test_nan_lands_in_lowest_bucket(self):
        assert classify(float("nan")) == 1


class TestInBuckets:
    def test_member_of_any_selected_bucket(self):
        assert in_buckets(0.05, [1, 5])
        assert in_buckets(4.0, [1, 5])

    def test_not_in_unselected_bucket(self):
        assert not in_buckets(1.0, [1, 5])

    def test_empty_selection_matches_nothing(self):
        assert not in_buckets(1.0, [])
