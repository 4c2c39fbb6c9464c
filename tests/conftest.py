import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

from glbindgen import Registry, parse_registry

SAMPLE_GL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<registry>
    <types>
        <type>typedef unsigned int <name>GLenum</name>;</type>
        <type>typedef unsigned int <name>GLbitfield</name>;</type>
    </types>
    <enums namespace="GL" group="Boolean">
        <enum value="0" name="GL_FALSE"/>
        <enum value="1" name="GL_TRUE"/>
    </enums>
    <enums namespace="GL">
        <enum value="0x00004000" name="GL_COLOR_BUFFER_BIT" group="ClearBufferMask"/>
        <enum value="0x0B50" name="GL_LIGHTING"/>
        <enum value="0x8074" name="GL_VERTEX_ARRAY"/>
        <enum value="0xFFFFFFFFFFFFFFFF" name="GL_TIMEOUT_IGNORED" type="ull"/>
        <enum value="0x84FE" name="GL_TEXTURE_MAX_ANISOTROPY"/>
        <enum value="0x84FE" name="GL_TEXTURE_MAX_ANISOTROPY_EXT"/>
        <enum value="0x0600" name="GL_2D"/>
        <enum value="0x8D65" name="GL_TEXTURE_EXTERNAL_OES" api="gles2"/>
    </enums>
    <commands namespace="GL">
        <command>
            <proto>void <name>glClear</name></proto>
            <param group="ClearBufferMask"><ptype>GLbitfield</ptype> <name>mask</name></param>
        </command>
        <command>
            <proto>void <name>glBegin</name></proto>
            <param><ptype>GLenum</ptype> <name>mode</name></param>
        </command>
        <command>
            <proto><ptype>GLenum</ptype> <name>glGetError</name></proto>
        </command>
        <command>
            <proto>void <name>glTexImage2D</name></proto>
            <param><ptype>GLenum</ptype> <name>target</name></param>
            <param><ptype>GLenum</ptype> <name>type</name></param>
            <param>const void *<name>pixels</name></param>
        </command>
        <command>
            <proto>void <name>glBindTexture</name></proto>
            <param><ptype>GLenum</ptype> <name>target</name></param>
            <param><ptype>GLuint</ptype> <name>texture</name></param>
        </command>
        <command>
            <proto>void <name>glShaderSource</name></proto>
            <param><ptype>GLuint</ptype> <name>shader</name></param>
            <param><ptype>GLsizei</ptype> <name>count</name></param>
            <param len="count">const <ptype>GLchar</ptype> *const*<name>string</name></param>
            <param len="count">const <ptype>GLint</ptype> *<name>length</name></param>
        </command>
        <command>
            <proto>void <name>glBindTextureEXT</name></proto>
            <param><ptype>GLenum</ptype> <name>target</name></param>
            <param><ptype>GLuint</ptype> <name>texture</name></param>
            <alias name="glBindTexture"/>
        </command>
    </commands>
    <feature api="gl" name="GL_VERSION_1_0" number="1.0">
        <require>
            <enum name="GL_FALSE"/>
            <enum name="GL_TRUE"/>
            <enum name="GL_COLOR_BUFFER_BIT"/>
            <enum name="GL_LIGHTING"/>
            <command name="glClear"/>
            <command name="glBegin"/>
            <command name="glGetError"/>
            <command name="glTexImage2D"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_1_1" number="1.1">
        <require>
            <enum name="GL_VERTEX_ARRAY"/>
            <command name="glBindTexture"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_2_0" number="2.0">
        <require>
            <command name="glShaderSource"/>
        </require>
    </feature>
    <feature api="gl" name="GL_VERSION_3_2" number="3.2">
        <require>
            <enum name="GL_TIMEOUT_IGNORED"/>
        </require>
        <remove profile="core">
            <enum name="GL_LIGHTING"/>
            <command name="glBegin"/>
        </remove>
    </feature>
    <feature api="gl" name="GL_VERSION_4_6" number="4.6">
        <require>
            <enum name="GL_TEXTURE_MAX_ANISOTROPY"/>
        </require>
    </feature>
    <feature api="gles2" name="GL_ES_VERSION_2_0" number="2.0">
        <require>
            <enum name="GL_COLOR_BUFFER_BIT"/>
            <command name="glClear"/>
        </require>
    </feature>
    <extensions>
        <extension name="GL_EXT_texture_filter_anisotropic" supported="gl|gles1|gles2">
            <require>
                <enum name="GL_TEXTURE_MAX_ANISOTROPY_EXT"/>
            </require>
        </extension>
        <extension name="GL_EXT_texture_object" supported="gl">
            <require>
                <command name="glBindTextureEXT"/>
                <command name="glBindTexture"/>
            </require>
        </extension>
        <extension name="GL_OES_EGL_image_external" supported="gles2">
            <require>
                <enum name="GL_TEXTURE_EXTERNAL_OES"/>
            </require>
        </extension>
    </extensions>
</registry>"""


@pytest.fixture
def sample_root() -> ET.Element:
    return ET.fromstring(SAMPLE_GL_XML)


@pytest.fixture
def raw_gl(sample_root: ET.Element) -> Registry:
    return parse_registry(sample_root, "gl")


@pytest.fixture
def sample_xml_path(tmp_path: Path) -> Path:
    path = tmp_path / "gl.xml"
    path.write_text(SAMPLE_GL_XML, encoding="utf-8")
    return path


@pytest.fixture
def make_registry_root() -> Callable[[str], ET.Element]:
    def _make_registry_root(inner_xml: str) -> ET.Element:
        return ET.fromstring(f"<registry>{inner_xml}</registry>")

    return _make_registry_root
