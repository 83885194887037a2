"""Unit tests configuration file."""

import os

import pytest

SAMPLE_XML = os.path.join(os.path.dirname(os.path.realpath(__file__)), "generator", "video.xml")

COPYRIGHT = """
Copyright 2024 Example Contributors
SPDX-License-Identifier: Apache-2.0
"""

BASE_TYPES = """
<type name="stdint" category="include">#include &lt;stdint.h&gt;</type>
<type requires="stdint" name="uint32_t"/>
<type requires="stdint" name="uint8_t"/>
<type name="StdVideoTestMode" category="enum"/>
"""

BASE_ENUMS = """<enums name="StdVideoTestMode" type="enum">
<enum name="STD_VIDEO_TEST_MODE_OFF" value="0"/>
</enums>"""


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def registry_xml(types="", enums=None, extensions="", comment=COPYRIGHT):
    """Assemble a registry document around the given section bodies.

    Without ``enums``, a single placeholder enum block is emitted.
    """
    enums = BASE_ENUMS if enums is None else enums
    comment_element = f"<comment>{comment}</comment>" if comment is not None else ""
    return f"""<registry>
{comment_element}
<types comment="test types">{BASE_TYPES}{types}
</types>
{enums}
<extensions>{extensions}
</extensions>
</registry>
"""


def extension_xml(name, number, body):
    """Wrap ``body`` in an extension with a matching protect comment."""
    return f"""
<extension name="{name}" comment="protect with VULKAN_VIDEO_CODEC_{name.upper()}_H_" supported="vulkan" number="{number}">
<require>{body}
</require>
</extension>"""


def struct_xml(name, *members):
    """Declare a struct whose members are given as ``(type, name)`` pairs."""
    lines = "".join(
        f"\n<member><type>{member_type}</type> <name>{member_name}</name></member>"
        for member_type, member_name in members
    )
    return f'\n<type category="struct" name="{name}">{lines}\n</type>'


@pytest.fixture
def sample_xml():
    with open(SAMPLE_XML, encoding="utf-8") as f:
        return f.read()


def line_of(text, fragment):
    """Return the 1-based line of the first occurrence of ``fragment``."""
    return next(i for i, line in enumerate(text.splitlines(), 1) if fragment in line)
