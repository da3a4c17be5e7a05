"""
Unit tests for SizeBucketer.
Verifies exact-size grouping, the minimum-size filter and repeated-path handling.
"""
from dedup.core import File, SizeBucketer


class TestSizeBucketer:
    """Test file grouping by size."""

    def test_groups_by_size_filters_single_files(self):
        """Only sizes shared by 2+ files become candidate groups."""
        files = [
            File(path="/a.txt", size=1024),
            File(path="/b.txt", size=1024),  # Same size → group
            File(path="/c.txt", size=2048),  # Single file → filtered
        ]

        groups = SizeBucketer().bucket(files)

        assert len(groups) == 1
        assert groups[0].size == 1024
        assert groups[0].files == ["/a.txt", "/b.txt"]

    def test_min_size_filter(self):
        files = [
            File(path="/small1", size=10),
            File(path="/small2", size=10),
            File(path="/big1", size=5000),
            File(path="/big2", size=5000),
        ]
        bucketer = SizeBucketer(min_size=2048)
        groups = bucketer.bucket(files)

        assert [g.size for g in groups] == [5000]
        assert bucketer.files_seen == 4

    def test_min_size_is_inclusive(self):
        files = [File(path="/a", size=2048), File(path="/b", size=2048)]
        assert len(SizeBucketer(min_size=2048).bucket(files)) == 1

    def test_repeated_path_is_dropped(self):
        """A root given twice must not make a file its own duplicate."""
        files = [
            File(path="/x/a.jpg", size=100),
            File(path="/x/a.jpg", size=100),
        ]
        assert SizeBucketer().bucket(files) == []

    def test_keeps_arrival_order_within_group(self):
        files = [File(path=f"/f{i}", size=7) for i in (3, 1, 2)]
        groups = SizeBucketer().bucket(files)
        assert groups[0].files == ["/f3", "/f1", "/f2"]

    def test_largest_groups_first(self):
        files = [
            File(path="/s1", size=10), File(path="/s2", size=10),
            File(path="/l1", size=999), File(path="/l2", size=999),
            File(path="/m1", size=50), File(path="/m2", size=50),
        ]
        assert [g.size for g in SizeBucketer().bucket(files)] == [999, 50, 10]

    def test_accepts_lazy_streams(self):
        def records():
            yield File(path="/a", size=1)
            yield File(path="/b", size=1)

        assert len(SizeBucketer().bucket(records())) == 1

    def test_stops_when_cancelled(self):
        files = [File(path="/a", size=1), File(path="/b", size=1)]
        assert SizeBucketer().bucket(files, stopped_flag=lambda: True) == []

    def test_empty_input(self):
        assert SizeBucketer().bucket([]) == []

    def test_same_inode_under_two_paths_is_dropped(self):
        """A relative and an absolute spelling of one file keep only the first spelling."""
        files = [
            File(path="/home/u/photos/a.jpg", size=100, dev=1, ino=42),
            File(path="photos/a.jpg", size=100, dev=1, ino=42),
            File(path="/home/u/photos/b.jpg", size=100, dev=1, ino=43),
        ]
        groups = SizeBucketer().bucket(files)
        assert groups[0].files == ["/home/u/photos/a.jpg", "/home/u/photos/b.jpg"]

    def test_same_inode_on_other_device_is_kept(self):
        files = [
            File(path="/mnt/a/x.bin", size=100, dev=1, ino=7),
            File(path="/mnt/b/x.bin", size=100, dev=2, ino=7),
        ]
        assert len(SizeBucketer().bucket(files)) == 1
