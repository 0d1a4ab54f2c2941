"""Release fixtures shared by the release tests."""

from __future__ import annotations

from deployer.platforms.android import AndroidDeploymentOptions


def android_options(package_name: str = "") -> AndroidDeploymentOptions:
    return AndroidDeploymentOptions(
        package_name=package_name,
        application_id="com.example.notes",
        application_version=3,
        display_version="1.0.0",
        keystore=b"ks",
        key_alias="release",
        key_pass="k",
        store_pass="s",
    )
