"""Element sets shared by the test suites."""

ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995"
ISS_LINE2 = "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598"

NOAA_NAME = "NOAA 15"
NOAA_LINE1 = "1 25338U 98030A   24025.51782528  .00000120  00000-0  67511-4 0  9990"

GPS_NAME = "GPS BIIR-2 (PRN 13)"
GPS_LINE1 = "1 24876U 97035A   23259.57580000 -.00000049  00000-0  00000-0 0  9991"
GPS_LINE2 = "2 24876  55.0000 220.9944 0004263 122.0101 312.2755  2.00560000415593"


def catalog_text(count, names=None, line_ending="\r\n", pad_names=True):
    """CelesTrak-style catalog with ``count`` records."""
    lines = []
    for i in range(count):
        name = names[i] if names else f"SAT-{i}"
        if pad_names:
            name = name.ljust(24)
        lines.extend([name, ISS_LINE1, ISS_LINE2])
    return line_ending.join(lines) + line_ending


class StubSatrec:
    """Stands in for sgp4's Satrec, replaying queued (error, r, v) results."""

    def __init__(self, *results):
        self.jdsatepoch = 2460000.5
        self.jdsatepochF = 0.25
        self.results = list(results)
        self.calls = []

    def sgp4(self, jd, fr):
        self.calls.append((jd, fr))
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]
