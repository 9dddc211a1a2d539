"""Fallback test suite used when the published suite cannot be loaded."""

from collections.abc import Sequence

from dpi_probe.models.suite import Test

BUILTIN_SUITE: Sequence[Test] = (
    Test(
        id="CF-01",
        provider="Cloudflare",
        url="https://speed.cloudflare.com/__down?bytes=131072",
        times=1,
    ),
    Test(
        id="HZ-FSN",
        provider="Hetzner",
        url="https://fsn1-speed.hetzner.com/100MB.bin",
        times=1,
    ),
    Test(
        id="HZ-HEL",
        provider="Hetzner",
        url="https://hel1-speed.hetzner.com/100MB.bin",
        times=1,
    ),
    Test(
        id="OVH-01",
        provider="OVH",
        url="https://proof.ovh.net/files/1Mb.dat",
        times=1,
    ),
    Test(
        id="T2-01",
        provider="Tele2",
        url="https://speedtest.tele2.net/1MB.zip",
        times=1,
    ),
)
