"""Unit tests for relative path casing normalization (copyown.normalize).

Tests cover:
- PascalCase final segments converted to kebab-case
- duplicated component segments collapsed to the sibling file
- kebab-case, camelCase and package specifiers left alone
- the preserve-casing directive as a total bypass
- idempotence
"""

from __future__ import annotations

import pytest

from copyown.normalize import (
    has_preserve_casing_directive,
    normalize_import_paths,
    normalize_specifier,
)


# ---------------------------------------------------------------------------
# normalize_import_paths
# ---------------------------------------------------------------------------


class TestNormalizeImportPaths:
    def test_converts_pascal_case_import(self):
        content = "import { FileImage } from './FileImage';"
        assert normalize_import_paths(content) == "import { FileImage } from './file-image';"

    def test_collapses_nested_pascal_case_path(self):
        content = "import { Upload } from '../Upload/Upload';"
        assert normalize_import_paths(content) == "import { Upload } from './upload';"

    def test_preserves_kebab_case_imports(self):
        content = "import { Input } from './input';"
        assert normalize_import_paths(content) == content

    def test_leaves_package_imports_alone(self):
        content = "import { Field } from '@/lib/microbuild/FieldTypes';\nimport { Box } from '@mantine/core';"
        assert normalize_import_paths(content) == content

    def test_leaves_camel_case_hook_files_alone(self):
        content = "import { useFiles } from '../hooks/useFiles';"
        assert normalize_import_paths(content) == content

    def test_keeps_trailing_index(self):
        content = "import { VForm } from './VForm/index';"
        assert normalize_import_paths(content) == "import { VForm } from './vform/index';"

    def test_handles_every_import_in_file(self):
        content = (
            '"use client";\n'
            "import type { FormFieldProps } from './FormField';\n"
            "import { FormFieldLabel } from \"./components/FormFieldLabel\";\n"
            "import React from 'react';\n"
        )
        expected = (
            '"use client";\n'
            "import type { FormFieldProps } from './form-field';\n"
            "import { FormFieldLabel } from \"./components/form-field-label\";\n"
            "import React from 'react';\n"
        )
        assert normalize_import_paths(content) == expected

    def test_skips_files_with_preserve_casing_directive(self):
        content = "// @microbuild-preserve-casing\nimport { FormField } from './FormField';"
        assert normalize_import_paths(content) == content

    def test_directive_after_first_import_does_not_apply(self):
        content = (
            "import { FormField } from './FormField';\n"
            "// @microbuild-preserve-casing\n"
        )
        assert "from './form-field'" in normalize_import_paths(content)

    def test_directive_after_first_import_without_semicolons(self):
        content = (
            "export const a = 1\n"
            "import { X } from './FooBar'\n"
            "// @microbuild-preserve-casing\n"
        )
        assert "from './foo-bar'" in normalize_import_paths(content)

    def test_directive_with_custom_namespace(self):
        content = "// @buildpad-preserve-casing\nimport { FormField } from './FormField';"
        assert normalize_import_paths(content, namespace="buildpad") == content
        assert normalize_import_paths(content) != content

    @pytest.mark.parametrize(
        "content",
        [
            "import { Upload } from '../Upload/Upload';",
            "import { A } from './InputBlockEditor';\nimport { B } from '../../Shared/VForm';",
            "import x from './x';",
        ],
    )
    def test_idempotent(self, content):
        once = normalize_import_paths(content)
        assert normalize_import_paths(once) == once


# ---------------------------------------------------------------------------
# normalize_specifier
# ---------------------------------------------------------------------------


class TestNormalizeSpecifier:
    @pytest.mark.parametrize(
        "specifier, expected",
        [
            ("./FileImage", "./file-image"),
            ("../Upload/Upload", "./upload"),
            ("./Upload/Upload", "./upload"),
            ("../../Upload/Upload", "../upload"),
            ("./upload/Upload", "./upload"),
            ("../shared/VForm", "../shared/vform"),
        ],
    )
    def test_normalizes(self, specifier, expected):
        assert normalize_specifier(specifier) == expected

    @pytest.mark.parametrize("specifier", ["./input", "./useAuth", "./CSS", ".", "..", "./styles.module.css"])
    def test_already_normalized(self, specifier):
        assert normalize_specifier(specifier) is None


class TestHasPreserveCasingDirective:
    def test_directive_before_imports(self):
        content = "/* header */\n// @microbuild-preserve-casing\nimport a from './A';"
        assert has_preserve_casing_directive(content)

    def test_directive_must_be_own_line(self):
        content = "const x = 1; // @microbuild-preserve-casing\nimport a from './A';"
        assert not has_preserve_casing_directive(content)

    def test_directive_without_imports(self):
        assert has_preserve_casing_directive("// @microbuild-preserve-casing\nexport {};")

    def test_no_directive(self):
        assert not has_preserve_casing_directive("import a from './A';")
