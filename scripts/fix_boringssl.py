#!/usr/bin/env python3
"""Patch BoringSSL-GRPC build settings in Pods/Pods.xcodeproj.

Run from the directory that holds Pods/ after `pod install`. Extra arguments
are passed through to `podfix` (e.g. `--fix boringssl-debug-symbols`).
"""
import sys

from podfix.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
