import datetime
import unittest

from dateutil import tz

from deployhist import _common
from deployhist.tokens import Action, Job, Raw, Status, parse_date, parse_version
from deployhist.version import Version, VersionFormat

UTC = datetime.timezone.utc


class TestParseDate(unittest.TestCase):

    def test_valid(self):
        dt = parse_date("1/2/2006 3:04:05 PM", UTC)
        assert dt == datetime.datetime(2006, 1, 2, 15, 4, 5, tzinfo=UTC)

        dt = parse_date("12/31/2021 12:00:00 AM", UTC)
        assert dt == datetime.datetime(2021, 12, 31, 0, 0, 0, tzinfo=UTC)

        dt = parse_date("6/29/2012 12:30:00 PM", UTC)
        assert dt.hour == 12

    def test_timezone(self):
        zone = tz.gettz("America/Los_Angeles")
        dt = parse_date("1/2/2006 3:04:05 PM", zone)
        assert dt.tzinfo is zone
        assert dt.utcoffset() == datetime.timedelta(hours=-8)
        assert dt == datetime.datetime(2006, 1, 2, 23, 4, 5, tzinfo=UTC)

    def test_invalid(self):
        input_strings = [
            "13/45/9999 25:99:99 PM",
            "2/30/2006 3:04:05 PM",
            "0/1/2006 3:04:05 PM",
            "1/2/2006 13:04:05 PM",
            "1/2/2006 3:60:05 PM",
            "1/2/2006 3:04:60 PM",
            "1/2/206 3:04:05 PM",
            "1/2/0000 3:04:05 PM",
            "1/2/2006 3:04:05",
        ]
        for s in input_strings:
            with self.assertRaises(_common.DateFormatError):
                parse_date(s, UTC)

    def test_date_format_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_date("", UTC)


class TestParseVersion(unittest.TestCase):

    def test_parse(self):
        v = parse_version("0, 123, 1, 12345")
        assert v == Version(VersionFormat.COMMA, 0, 123, 1, 12345)

        with self.assertRaises(_common.UnrecognizedVersionError):
            parse_version("0, 123, 1, 99999999999")


class TestTokenJSON(unittest.TestCase):

    def _job(self, **kwargs):
        d = {"action": Action.NEW,
             "kind": "Build",
             "build": "version-0123456789abcdef",
             "time": datetime.datetime(2006, 1, 2, 15, 4, 5,
                                       tzinfo=tz.gettz("America/Los_Angeles"))}
        d.update(kwargs)
        return Job(**d)

    def test_job_minimal(self):
        job = self._job()
        obj = job.to_json()
        assert list(obj.keys()) == ["Type", "Action", "Kind", "Build", "GUID", "Time"]
        assert obj["Type"] == "Job"
        assert obj["Action"] == "New"
        assert obj["GUID"] == ""
        assert obj["Time"] == "2006-01-02T15:04:05-08:00"
        assert Job.from_json(obj) == job

    def test_job_full(self):
        job = self._job(action=Action.REVERT,
                        version=Version(VersionFormat.COMMA, 0, 123, 1, 12345),
                        githash="aaaa")
        obj = job.to_json()
        assert obj["GUID"] == "aaaa"
        assert obj["GitHash"] == "aaaa"
        assert obj["Version"] == {"Format": "Comma", "Major": 0, "Minor": 123,
                                  "Maint": 1, "Build": 12345}
        decoded = Job.from_json(obj)
        assert decoded == job
        assert decoded.time.utcoffset() == datetime.timedelta(hours=-8)

    def test_job_kind_default(self):
        obj = self._job().to_json()
        del obj["Kind"]
        assert Job.from_json(obj).kind == "Build"

    def test_status_raw(self):
        assert Status("Done").to_json() == {"Type": "Status", "Value": "Done"}
        assert Raw("abc\n").to_json() == {"Type": "Raw", "Value": "abc\n"}
        assert Status.from_json({"Type": "Status", "Value": "Error"}) == Status("Error")
        assert Raw.from_json({"Type": "Raw", "Value": ""}) == Raw("")

    def test_type_mismatch(self):
        with self.assertRaises(_common.TokenTypeError):
            Raw.from_json({"Type": "Status", "Value": "Done"})
        with self.assertRaises(_common.TokenTypeError):
            Status.from_json({"Value": "Done"})
        with self.assertRaises(_common.TokenTypeError):
            Job.from_json(Raw("x").to_json())

    def test_invalid_fields(self):
        obj = self._job().to_json()
        obj["Action"] = "Delete"
        with self.assertRaises(_common.StreamDecodeError):
            Job.from_json(obj)

        obj = self._job().to_json()
        obj["Time"] = "yesterday"
        with self.assertRaises(_common.StreamDecodeError):
            Job.from_json(obj)

        with self.assertRaises(_common.StreamDecodeError):
            Raw.from_json({"Type": "Raw", "Value": 1})

    def test_immutable(self):
        raw = Raw("a")
        with self.assertRaises(AttributeError):
            raw.value = "b"
        assert raw + Raw("b") == Raw("ab")
        assert raw == Raw("a")
        assert Raw("Done") != Status("Done")
