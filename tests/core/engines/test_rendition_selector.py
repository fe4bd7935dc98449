import io

from rendition_store.core.engines.rendition_selector import RenditionSelector


class TestRequiresTranscode:
    def test_original_style_never_transcodes(self) -> None:
        assert RenditionSelector.requires_transcode("original", ["-resize 10%"]) is False

    def test_empty_options_never_transcode(self) -> None:
        assert RenditionSelector.requires_transcode("thumb", []) is False

    def test_styled_with_options_transcodes(self) -> None:
        assert RenditionSelector.requires_transcode("thumb", ["-resize 10%"]) is True


class TestGifOptions:
    def test_appends_stabilization_options(self) -> None:
        assert RenditionSelector.gif_options(["-resize 50%"]) == [
            "-resize 50%",
            "-coalesce",
            "-repage 0x0",
            "+repage",
        ]

    def test_crop_options_get_repaged(self) -> None:
        options = RenditionSelector.gif_options(["-gravity center", "-crop 10x10+0+0"])

        assert options[:2] == ["-gravity center", "-crop 10x10+0+0 +repage"]

    def test_caller_list_is_not_mutated(self) -> None:
        options = ["-crop 10x10+0+0"]

        RenditionSelector.gif_options(options)

        assert options == ["-crop 10x10+0+0"]


class TestSelect:
    def test_pass_through_returns_input_bytes(self, fake_transcoder) -> None:
        stream = io.BytesIO(b"raw-image")
        stream.read()

        output = RenditionSelector.select(
            stream,
            style_name="original",
            convert_options=["-resize 10%"],
            content_type="image/jpeg",
            transcoder=fake_transcoder,
        )

        assert output == b"raw-image"
        assert fake_transcoder.calls == []

    def test_single_frame_path_emits_jpeg(self, fake_transcoder) -> None:
        output = RenditionSelector.select(
            io.BytesIO(b"raw-image"),
            style_name="thumb",
            convert_options=["-resize 10%"],
            content_type="image/png",
            transcoder=fake_transcoder,
        )

        assert output == b"rendered-bytes"
        assert fake_transcoder.calls == [(b"raw-image", ["-resize 10%"], "jpeg")]

    def test_gif_path_emits_gif(self, fake_transcoder) -> None:
        RenditionSelector.select(
            io.BytesIO(b"gif-bytes"),
            style_name="thumb",
            convert_options=["-crop 5x5+0+0"],
            content_type="image/gif",
            transcoder=fake_transcoder,
        )

        data, options, output_format = fake_transcoder.calls[0]
        assert data == b"gif-bytes"
        assert output_format == "gif"
        assert options == ["-crop 5x5+0+0 +repage", "-coalesce", "-repage 0x0", "+repage"]

    def test_is_animated_ignores_parameters(self) -> None:
        assert RenditionSelector.is_animated("Image/GIF; charset=binary") is True
        assert RenditionSelector.is_animated("image/jpeg") is False
