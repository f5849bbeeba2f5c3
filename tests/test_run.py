import os
import tempfile

import numpy as np
import pytest
import tifffile
import yaml

import sstiff2vtk
import sstools
from conversion.volume import Volume
from conversion.writer import read_vtk, write_tiff_stack, write_vtk


def _write_sequence(prefix, n_files, dtype=np.uint16):
    for i in range(n_files):
        image = np.full((4, 3), 1000 * i, dtype=dtype)
        tifffile.imwrite(
            f"{prefix}{i:02d}.tif", image, photometric="minisblack"
        )


def test_sstiff2vtk_requires_number_of_files():
    with pytest.raises(SystemExit) as exc_info:
        sstiff2vtk.main(["-prefix", "im"])
    assert exc_info.value.code == 2


def test_sstiff2vtk_rejects_zero_files():
    with pytest.raises(SystemExit) as exc_info:
        sstiff2vtk.main(["-prefix", "im", "-n", "0"])
    assert exc_info.value.code == 2


def test_sstiff2vtk():
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "im")
        out_file = os.path.join(tmp, "ImageData_Original.vtk")
        _write_sequence(prefix, 3)

        code = sstiff2vtk.main(["-prefix", prefix, "-n", "3", "-save", out_file])
        assert code == 0
        volume = read_vtk(out_file)

    assert volume.dimensions == (3, 4, 3)
    assert (volume.data[0] == 0).all()
    assert (volume.data[1] == 127).all()
    assert (volume.data[2] == 255).all()


def test_sstiff2vtk_number_of_files_from_config():
    """ Options can be given by a YAML file; the command line wins. """
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "im")
        out_file = os.path.join(tmp, "out.vtk")
        config_file = os.path.join(tmp, "config.yml")
        _write_sequence(prefix, 4)
        with open(config_file, "w") as fp:
            yaml.dump({"prefix": "unused", "n": 4, "save": out_file}, fp)

        code = sstiff2vtk.main(["-config", config_file, "-prefix", prefix])
        assert code == 0
        assert read_vtk(out_file).dimensions == (3, 4, 4)


def test_unknown_config_key():
    with tempfile.TemporaryDirectory() as tmp:
        config_file = os.path.join(tmp, "config.yml")
        with open(config_file, "w") as fp:
            yaml.dump({"pattern": "%s%03d.tif"}, fp)
        with pytest.raises(SystemExit) as exc_info:
            sstiff2vtk.main(["-config", config_file, "-n", "2"])
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "config",
    [{"n": 2.5}, {"n": [2]}, {"n": "2"}, {"n": True}, {"prefix": 12}],
)
def test_config_value_of_wrong_type(config):
    """ Values of the wrong type are reported as usage errors. """
    with tempfile.TemporaryDirectory() as tmp:
        config_file = os.path.join(tmp, "config.yml")
        with open(config_file, "w") as fp:
            yaml.dump(config, fp)
        with pytest.raises(SystemExit) as exc_info:
            sstools.main(["-tiff2vtk", "-config", config_file])
    assert exc_info.value.code == 2


def test_sstools_requires_a_mode():
    with pytest.raises(SystemExit) as exc_info:
        sstools.main(["-prefix", "im"])
    assert exc_info.value.code == 2


def test_sstools_modes_are_exclusive():
    with pytest.raises(SystemExit) as exc_info:
        sstools.main(["-tiff2vtk", "-vtk2tiffseq"])
    assert exc_info.value.code == 2


def test_sstools_tiff2vtk_with_report():
    data = np.arange(0, 800, 100, dtype=np.uint16).reshape((2, 2, 2))
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "stack")
        report_file = os.path.join(tmp, "report.yml")
        write_tiff_stack(Volume(data), prefix + ".tif")

        code = sstools.main(
            ["-tiff2vtk", "-prefix", prefix, "-report", report_file]
        )
        assert code == 0
        volume = read_vtk(prefix + ".vtk")
        with open(report_file, "r") as fp:
            report = yaml.safe_load(fp)

    assert volume.buffer.tolist() == [0, 36, 72, 109, 145, 182, 218, 255]
    assert report["output"] == prefix + ".vtk"
    assert report["intensity_range"] == [0, 700]


def test_sstools_vtk2tiffseq():
    data = np.arange(2 * 3 * 4, dtype=np.uint8).reshape((2, 3, 4))
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "im")
        write_vtk(Volume(data), prefix + ".vtk")

        assert sstools.main(["-vtk2tiffseq", "-prefix", prefix]) == 0
        assert os.path.isfile(prefix + "0000.tif")
        assert os.path.isfile(prefix + "0001.tif")
        assert not os.path.exists(prefix + "0002.tif")


def test_unsupported_bit_depth_is_not_a_failure():
    """ Unsupported bit depth is reported, nothing is written, exit code 0. """
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "im")
        tifffile.imwrite(
            prefix + ".tif",
            np.zeros((2, 3, 4), dtype=np.float32),
            photometric="minisblack",
        )
        assert sstools.main(["-tiff2vtk", "-prefix", prefix]) == 0
        assert not os.path.exists(prefix + ".vtk")


def test_missing_input_is_a_failure():
    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(tmp, "im")
        assert sstools.main(["-tiff2vtk", "-prefix", prefix, "-n", "3"]) == 1
        assert sstools.main(["-vtk2tiffseq", "-prefix", prefix]) == 1


def test_prefix_too_long_is_a_failure():
    assert sstiff2vtk.main(["-prefix", "p" * 300, "-n", "2"]) == 1
