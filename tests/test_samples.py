import numpy as np

from imganalysis.loader import convert_to_grayscale, load_image
from imganalysis.samples import (
    chessboard,
    create_test_images,
    main,
    noise,
    square,
    uniform_gray,
    white_circle,
)


def test_uniform_gray_is_constant_128():
    image = uniform_gray()
    assert image.shape == (200, 200)
    assert image.dtype == np.uint8
    assert np.all(image == 128)


def test_white_circle_geometry():
    image = white_circle()
    assert image[100, 100] == 255
    assert image[0, 0] == 0
    assert image[100, 150] == 255
    assert image[100, 151] == 0
    assert np.array_equal(image, image.T)
    assert set(np.unique(image).tolist()) == {0, 255}


def test_chessboard_cells():
    image = chessboard()
    assert image[0, 0] == 255
    assert image[0, 30] == 0
    assert image[30, 30] == 255
    assert image[0, 25] == 255


def test_square_is_inclusive_rectangle():
    image = square()
    assert image[50, 50] == 255
    assert image[150, 150] == 255
    assert image[49, 100] == 0
    assert image[151, 100] == 0
    assert np.count_nonzero(image) == 101 * 101


def test_noise_is_reproducible_and_in_range():
    first = noise(7)
    assert np.array_equal(first, noise(7))
    assert first.shape == (200, 200)
    assert int(first.max()) < 255


def test_create_test_images_round_trip(tmp_path):
    paths = create_test_images(tmp_path / "images")
    assert sorted(p.name for p in paths) == sorted(
        ["uniform_gray.png", "white_circle.png", "chessboard.png", "square.png", "noise.png"]
    )
    assert all(p.exists() for p in paths)
    loaded = convert_to_grayscale(load_image(tmp_path / "images" / "square.png"))
    assert np.array_equal(loaded, square())


def test_main_writes_files(tmp_path, capsys):
    assert main([str(tmp_path)]) == 0
    assert (tmp_path / "white_circle.png").exists()
    assert "Test images created in" in capsys.readouterr().out