"""Parse metrics files produced by Picard analyses.

Metrics info:
https://broadinstitute.github.io/picard/picard-metric-definitions.html
"""
from ngsmap.utils import file_exists


class PicardMetricsParser(object):
    """Read metrics files produced by Picard analyses.
    """
    def get_dup_metrics(self, dup_metrics):
        """Retrieve a summary of duplication metrics, empty if the file is missing.
        """
        if not file_exists(dup_metrics):
            return {}
        with open(dup_metrics) as in_handle:
            return self._parse_dup_metrics(in_handle)

    def _parse_dup_metrics(self, in_handle):
        want_stats = ["READ_PAIRS_EXAMINED", "READ_PAIR_DUPLICATES",
                      "PERCENT_DUPLICATION", "ESTIMATED_LIBRARY_SIZE"]
        header = self._read_off_header(in_handle)
        if not header:
            return {}
        info = in_handle.readline().rstrip("\n").split("\t")
        return self._read_vals_of_interest(want_stats, header, info)

    def _read_vals_of_interest(self, want, header, info):
        vals = dict()
        for w in want:
            if w in header:
                i = header.index(w)
                vals[w] = info[i] if i < len(info) else ""
        return vals

    def _read_off_header(self, in_handle):
        while 1:
            line = in_handle.readline()
            if not line:
                return None
            if line.startswith("## METRICS"):
                break
        return in_handle.readline().rstrip("\n").split("\t")
