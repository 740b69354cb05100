"""Shared fixtures: small Pods projects written to temp directories."""

from __future__ import annotations

import plistlib

import pytest

PODS_PBXPROJ = """\
// !$*UTF8*$!
{
	archiveVersion = 1;
	classes = {
	};
	objectVersion = 46;
	objects = {

/* Begin PBXGroup section */
		A0000000000000000000000A /* Main */ = {
			isa = PBXGroup;
			children = (
			);
			sourceTree = "<group>";
		};
/* End PBXGroup section */

/* Begin PBXNativeTarget section */
		B0000000000000000000000B /* BoringSSL-GRPC */ = {
			isa = PBXNativeTarget;
			buildConfigurationList = C0000000000000000000000C /* Build configuration list for PBXNativeTarget "BoringSSL-GRPC" */;
			buildPhases = (
			);
			buildRules = (
			);
			dependencies = (
			);
			name = "BoringSSL-GRPC";
			productName = openssl_grpc;
			productType = "com.apple.product-type.library.static";
		};
		B1000000000000000000000B /* gRPC-Core */ = {
			isa = PBXNativeTarget;
			buildConfigurationList = C1000000000000000000000C /* Build configuration list for PBXNativeTarget "gRPC-Core" */;
			buildPhases = (
			);
			buildRules = (
			);
			dependencies = (
			);
			name = "gRPC-Core";
			productName = grpc;
			productType = "com.apple.product-type.library.static";
		};
/* End PBXNativeTarget section */

/* Begin PBXProject section */
		E0000000000000000000000E /* Project object */ = {
			isa = PBXProject;
			attributes = {
				LastUpgradeCheck = 1300;
			};
			buildConfigurationList = C2000000000000000000000C /* Build configuration list for PBXProject "Pods" */;
			compatibilityVersion = "Xcode 3.2";
			developmentRegion = en;
			hasScannedForEncodings = 0;
			knownRegions = (
				en,
			);
			mainGroup = A0000000000000000000000A /* Main */;
			projectDirPath = "";
			projectRoot = "";
			targets = (
				B0000000000000000000000B /* BoringSSL-GRPC */,
				B1000000000000000000000B /* gRPC-Core */,
			);
		};
/* End PBXProject section */

/* Begin XCBuildConfiguration section */
		D0000000000000000000000D /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				GCC_OPTIMIZATION_LEVEL = 2;
				GCC_WARN_INHIBIT_ALL_WARNINGS = YES;
				OTHER_CFLAGS = (
					"-DOPENSSL_NO_ASM",
					"-GCC_WARN_INHIBIT_ALL_WARNINGS",
					"-w",
				);
				PRODUCT_NAME = openssl_grpc;
				SDKROOT = iphoneos;
			};
			name = Debug;
		};
		D1000000000000000000000D /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				GCC_OPTIMIZATION_LEVEL = s;
				GCC_WARN_INHIBIT_ALL_WARNINGS = YES;
				OTHER_CFLAGS = (
					"-DOPENSSL_NO_ASM",
					"-GCC_WARN_INHIBIT_ALL_WARNINGS",
					"-w",
				);
				PRODUCT_NAME = openssl_grpc;
				SDKROOT = iphoneos;
			};
			name = Release;
		};
		D2000000000000000000000D /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				GCC_OPTIMIZATION_LEVEL = 2;
				PRODUCT_NAME = grpc;
				SDKROOT = iphoneos;
			};
			name = Debug;
		};
		D3000000000000000000000D /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				GCC_OPTIMIZATION_LEVEL = s;
				PRODUCT_NAME = grpc;
				SDKROOT = iphoneos;
			};
			name = Release;
		};
		D4000000000000000000000D /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				SDKROOT = iphoneos;
			};
			name = Debug;
		};
		D5000000000000000000000D /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				SDKROOT = iphoneos;
			};
			name = Release;
		};
/* End XCBuildConfiguration section */

/* Begin XCConfigurationList section */
		C0000000000000000000000C /* Build configuration list for PBXNativeTarget "BoringSSL-GRPC" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				D0000000000000000000000D /* Debug */,
				D1000000000000000000000D /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
		C1000000000000000000000C /* Build configuration list for PBXNativeTarget "gRPC-Core" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				D2000000000000000000000D /* Debug */,
				D3000000000000000000000D /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
		C2000000000000000000000C /* Build configuration list for PBXProject "Pods" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				D4000000000000000000000D /* Debug */,
				D5000000000000000000000D /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
/* End XCConfigurationList section */
	};
	rootObject = E0000000000000000000000E /* Project object */;
}
"""


def _configuration(name, settings):
    return {"isa": "XCBuildConfiguration", "buildSettings": settings, "name": name}


def _target(name, list_id):
    return {"isa": "PBXNativeTarget", "buildConfigurationList": list_id, "name": name, "buildPhases": []}


def _configuration_list(*ids):
    return {"isa": "XCConfigurationList", "buildConfigurations": list(ids), "defaultConfigurationName": "Release"}


def make_plist_project(targets):
    """Build a plist-shaped project from ``{target_name: {config: settings}}``.

    Target names may repeat by passing a list of ``(name, configs)`` pairs.
    """
    items = targets.items() if isinstance(targets, dict) else targets
    objects = {}
    target_ids = []
    for index, (name, configurations) in enumerate(items):
        configuration_ids = []
        for position, (config_name, settings) in enumerate(configurations.items()):
            configuration_id = f"CFG{index:03d}{position:03d}"
            objects[configuration_id] = _configuration(config_name, settings)
            configuration_ids.append(configuration_id)
        list_id = f"LST{index:03d}"
        objects[list_id] = _configuration_list(*configuration_ids)
        target_id = f"TGT{index:03d}"
        objects[target_id] = _target(name, list_id)
        target_ids.append(target_id)
    objects["ROOT"] = {"isa": "PBXProject", "targets": target_ids, "mainGroup": "GRP"}
    objects["GRP"] = {"isa": "PBXGroup", "children": [], "sourceTree": "<group>"}
    return {"archiveVersion": "1", "classes": {}, "objectVersion": "46", "objects": objects, "rootObject": "ROOT"}


def boringssl_settings(optimization):
    return {
        "GCC_OPTIMIZATION_LEVEL": optimization,
        "GCC_WARN_INHIBIT_ALL_WARNINGS": "YES",
        "OTHER_CFLAGS": ["-DOPENSSL_NO_ASM", "-GCC_WARN_INHIBIT_ALL_WARNINGS", "-w"],
        "PRODUCT_NAME": "openssl_grpc",
        "SDKROOT": "iphoneos",
    }


@pytest.fixture
def pbxproj_project(tmp_path):
    """A ``Pods.xcodeproj`` bundle in ASCII pbxproj format."""
    bundle = tmp_path / "Pods" / "Pods.xcodeproj"
    bundle.mkdir(parents=True)
    (bundle / "project.pbxproj").write_text(PODS_PBXPROJ, encoding="utf-8")
    return bundle


@pytest.fixture
def plist_project(tmp_path):
    """The same Pods project as an XML property list."""
    data = make_plist_project(
        {
            "BoringSSL-GRPC": {"Debug": boringssl_settings("2"), "Release": boringssl_settings("s")},
            "gRPC-Core": {
                "Debug": {"GCC_OPTIMIZATION_LEVEL": "2", "PRODUCT_NAME": "grpc"},
                "Release": {"GCC_OPTIMIZATION_LEVEL": "s", "PRODUCT_NAME": "grpc"},
            },
        }
    )
    path = tmp_path / "project.pbxproj"
    with open(path, "wb") as fp:
        plistlib.dump(data, fp, sort_keys=False)
    return path


def read_plist(path):
    with open(path, "rb") as fp:
        return plistlib.load(fp)


def snapshot(descriptor):
    """``{target: {configuration: settings}}`` for every target."""
    return {
        target.name: {configuration.name: dict(configuration.settings) for configuration in target.configurations()}
        for target in descriptor.targets()
    }
