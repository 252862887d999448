from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np

from plotit.data import CsvSource, load_all_samples, load_samples
from plotit.errors import ConfigError, DataSourceError, PlotDataError
from plotit.graph import DataSetSpec, GraphSpec


class LoadSamplesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def _write(self, name: str, text: str) -> Path:
        path = self.dir / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_headers_and_error_columns(self) -> None:
        path = self._write("a.csv", "x,ux,y,uy\n0.5,0.1,1.0,0.2\n1.0,0.1,2.0,0.2\n1.5,0.1,3.0,0.3\n")
        samples = load_samples(
            CsvSource(path=path, has_headers=True, x_column=0, y_column=2, x_error_column=1, y_error_column=3)
        )
        np.testing.assert_allclose(samples.x, [0.5, 1.0, 1.5])
        np.testing.assert_allclose(samples.y, [1.0, 2.0, 3.0])
        np.testing.assert_allclose(samples.x_err, [0.1, 0.1, 0.1])
        np.testing.assert_allclose(samples.y_err, [0.2, 0.2, 0.3])
        self.assertEqual(samples.source_name, "a.csv")

    def test_no_headers_and_custom_delimiter(self) -> None:
        path = self._write("b.csv", "1;-2\n 3 ; 4.5\n")
        samples = load_samples(CsvSource(path=path, x_column=0, y_column=1), delimiter=";", name="semi")
        np.testing.assert_allclose(samples.x, [1.0, 3.0])
        np.testing.assert_allclose(samples.y, [-2.0, 4.5])
        self.assertIsNone(samples.x_err)
        self.assertEqual(samples.source_name, "semi")

    def test_unparsable_cell_reports_row_and_column(self) -> None:
        path = self._write("c.csv", "x,y\n1,2\n3,oops\n")
        with self.assertRaises(DataSourceError) as ctx:
            load_samples(CsvSource(path=path, has_headers=True, x_column=0, y_column=1))
        self.assertEqual(ctx.exception.row, 3)
        self.assertEqual(ctx.exception.column, 1)
        self.assertIn("oops", str(ctx.exception))

    def test_column_out_of_range(self) -> None:
        path = self._write("d.csv", "1,2\n3,4\n")
        with self.assertRaises(DataSourceError) as ctx:
            load_samples(CsvSource(path=path, x_column=0, y_column=5))
        self.assertEqual(ctx.exception.column, 5)

    def test_missing_file(self) -> None:
        with self.assertRaises(DataSourceError):
            load_samples(CsvSource(path=self.dir / "missing.csv"))

    def test_multi_character_delimiter(self) -> None:
        path = self._write("e.csv", "1,2\n")
        with self.assertRaises(DataSourceError):
            load_samples(CsvSource(path=path), delimiter=";;")

    def test_negative_uncertainty_is_bad_data(self) -> None:
        path = self._write("f.csv", "1,2,-0.5\n")
        with self.assertRaises(PlotDataError):
            load_samples(CsvSource(path=path, x_column=0, y_column=1, y_error_column=2))

    def test_empty_file_yields_empty_samples(self) -> None:
        path = self._write("g.csv", "")
        samples = load_samples(CsvSource(path=path))
        self.assertEqual(len(samples), 0)

    def test_load_all_samples_follows_data_set_order(self) -> None:
        first = self._write("first.csv", "1,10\n2,20\n")
        second = self._write("second.csv", "5,50\n")
        spec = GraphSpec(
            title="t",
            canvas_size=(100, 100),
            data_sets=(
                DataSetSpec(name="one", source=CsvSource(path=first)),
                DataSetSpec(name="two", source=CsvSource(path=second)),
            ),
        )
        sets = load_all_samples(spec)
        self.assertEqual([len(s) for s in sets], [2, 1])
        self.assertEqual([s.source_name for s in sets], ["one", "two"])

    def test_data_set_without_source(self) -> None:
        spec = GraphSpec(title="t", canvas_size=(100, 100), data_sets=(DataSetSpec(name="bare"),))
        with self.assertRaises(ConfigError):
            load_all_samples(spec)


if __name__ == "__main__":
    unittest.main()
