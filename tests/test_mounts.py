import unittest

from docker.errors import InvalidArgument

from mountopt.mounts import (
    BindOptions,
    MountDescriptor,
    MountKind,
    VolumeOptions,
    ensure_bind_options,
    ensure_volume_options,
)
from mountopt.parser import parse


class EnsureOptionsTests(unittest.TestCase):
    """
    Tests the lazily created option structures
    """

    def test_volume_options_created_once(self):
        mount = MountDescriptor()
        self.assertIsNone(mount.volume_options)
        options = ensure_volume_options(mount)
        self.assertEqual(options, VolumeOptions())
        options.labels["a"] = "b"
        self.assertIs(ensure_volume_options(mount), options)
        self.assertEqual(mount.volume_options.labels, {"a": "b"})

    def test_bind_options_created_once(self):
        mount = MountDescriptor()
        options = ensure_bind_options(mount)
        self.assertEqual(options, BindOptions())
        self.assertIs(ensure_bind_options(mount), options)
        self.assertIsNone(mount.volume_options)

    def test_fresh_descriptors_do_not_share_maps(self):
        first = ensure_volume_options(MountDescriptor())
        second = ensure_volume_options(MountDescriptor())
        first.labels["a"] = "b"
        first.driver_config.options["c"] = "d"
        self.assertEqual(second.labels, {})
        self.assertEqual(second.driver_config.options, {})


class DescriptorTests(unittest.TestCase):
    """
    Tests the descriptor helpers
    """

    def test_mode(self):
        self.assertEqual(parse("target=/b").mode, "rw")
        self.assertEqual(parse("target=/b,ro").mode, "ro")

    def test_as_dict(self):
        self.assertEqual(
            parse("type=bind,source=/a,target=/b,bind-propagation=slave").as_dict(),
            {
                "kind": "bind",
                "source": "/a",
                "target": "/b",
                "read_only": False,
                "max_bandwidth": 0,
                "max_iops": 0,
                "volume_options": None,
                "bind_options": {"propagation": "slave"},
            },
        )

    def test_known_kinds(self):
        self.assertIn(MountKind.BIND, MountKind.known_kinds)
        self.assertIn(MountKind.VOLUME, MountKind.known_kinds)
        self.assertNotIn("weird", MountKind.known_kinds)


class DockerMountTests(unittest.TestCase):
    """
    Tests conversion to docker-py mounts
    """

    def test_bind(self):
        mount = parse("type=bind,source=/a,target=/b,readonly,bind-propagation=rshared").to_docker_mount()
        self.assertEqual(mount["Type"], "bind")
        self.assertEqual(mount["Source"], "/a")
        self.assertEqual(mount["Target"], "/b")
        self.assertTrue(mount["ReadOnly"])
        self.assertEqual(mount["BindOptions"], {"Propagation": "rshared"})

    def test_volume(self):
        mount = parse(
            "source=data,target=/data,volume-driver=local,"
            "volume-opt=type=tmpfs,volume-label=a=b,volume-nocopy"
        ).to_docker_mount()
        self.assertEqual(mount["Type"], "volume")
        self.assertFalse(mount["ReadOnly"])
        self.assertEqual(
            mount["VolumeOptions"],
            {
                "NoCopy": True,
                "Labels": {"a": "b"},
                "DriverConfig": {"Name": "local", "Options": {"type": "tmpfs"}},
            },
        )

    def test_anonymous_volume(self):
        mount = parse("target=/c").to_docker_mount()
        self.assertIsNone(mount["Source"])
        self.assertNotIn("VolumeOptions", mount)

    def test_incompatible_options_rejected(self):
        with self.assertRaises(InvalidArgument):
            parse("type=tmpfs,target=/b,volume-label=a").to_docker_mount()
