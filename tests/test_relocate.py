from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hotmanim.errors import RelocateError
from hotmanim.relocate import relocate_last_artifact
from hotmanim.session import Artifact, ArtifactSlot


class RelocateTests(unittest.TestCase):
    def test_no_recorded_artifact_is_noop(self) -> None:
        with mock.patch("hotmanim.relocate.shutil.move") as move_mock, mock.patch(
            "hotmanim.relocate.user_videos_dir"
        ) as videos_mock:
            self.assertIsNone(relocate_last_artifact(ArtifactSlot()))

        move_mock.assert_not_called()
        videos_mock.assert_not_called()

    def test_moves_file_into_destination_and_clears_slot(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "media" / "videos").mkdir(parents=True)
            (root / "media" / "videos" / "Scene.mp4").write_bytes(b"x")
            slot = ArtifactSlot()
            slot.store(Artifact(path="media/videos/Scene.mp4", directory=root))

            moved = relocate_last_artifact(slot, destination=root / "out")

            self.assertEqual(moved, root / "out" / "Scene.mp4")
            self.assertTrue((root / "out" / "Scene.mp4").exists())
            self.assertIsNone(slot.peek())

    def test_missing_source_raises_relocate_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            slot = ArtifactSlot()
            slot.store(Artifact(path="media/gone.mp4", directory=root))

            with self.assertRaises(RelocateError):
                relocate_last_artifact(slot, destination=root / "out")

    def test_failed_move_keeps_artifact_for_retry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "media").mkdir()
            (root / "media" / "Scene.mp4").write_bytes(b"NEW")
            blocked = root / "Videos"
            blocked.write_text("not a directory", encoding="utf-8")
            artifact = Artifact(path="media/Scene.mp4", directory=root)
            slot = ArtifactSlot()
            slot.store(artifact)

            with self.assertRaises(RelocateError):
                relocate_last_artifact(slot, destination=blocked)

            self.assertIs(slot.peek(), artifact)

            blocked.unlink()
            moved = relocate_last_artifact(slot, destination=blocked)

            self.assertEqual(moved, blocked / "Scene.mp4")
            self.assertIsNone(slot.peek())

    def test_existing_video_with_same_name_is_kept(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            videos = root / "Videos"
            videos.mkdir()
            (videos / "Scene.mp4").write_bytes(b"OLD")
            (videos / "Scene-1.mp4").write_bytes(b"OLDER")
            (root / "media").mkdir()
            (root / "media" / "Scene.mp4").write_bytes(b"NEW")
            slot = ArtifactSlot()
            slot.store(Artifact(path="media/Scene.mp4", directory=root))

            moved = relocate_last_artifact(slot, destination=videos)

            self.assertEqual(moved, videos / "Scene-2.mp4")
            self.assertEqual((videos / "Scene.mp4").read_bytes(), b"OLD")
            self.assertEqual((videos / "Scene-1.mp4").read_bytes(), b"OLDER")
            self.assertEqual((videos / "Scene-2.mp4").read_bytes(), b"NEW")
            self.assertEqual(len(list(videos.iterdir())), 3)

    def test_unresolvable_home_raises_relocate_error(self) -> None:
        slot = ArtifactSlot()
        slot.store(Artifact(path="media/x.mp4", directory=Path("/work")))

        with mock.patch(
            "hotmanim.relocate.user_videos_dir",
            side_effect=RuntimeError("Could not determine home directory."),
        ):
            with self.assertRaises(RelocateError):
                relocate_last_artifact(slot)


if __name__ == "__main__":
    unittest.main()
