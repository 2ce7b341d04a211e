"""Unit tests for ImplFollowsTypeRule."""

from rust_codestyle.domain.rules import ImplFollowsTypeRule
from tests.conftest import fix_until_stable, rust, source_text


class TestImplFollowsTypeCheck:
    """Detecting misplaced impl blocks."""

    def test_impl_before_declaration(self) -> None:
        """An impl above its struct is reported at the impl."""
        source = rust("""
            impl Foo {
                fn new() -> Self {
                    Foo { x: 1 }
                }
            }

            struct Foo {
                x: i32,
            }
        """)
        [violation] = ImplFollowsTypeRule().check(source)
        assert (violation.line, violation.column) == (1, 1)
        assert violation.message == (
            "impl `Foo` should directly follow the declaration of `Foo` (line 7)")
        assert violation.fixable

    def test_impl_separated_by_unrelated_item(self) -> None:
        """Any other item between the type and its impl is a violation."""
        source = rust("""
            struct Foo;

            fn helper() {}

            impl Foo {}
        """)
        [violation] = ImplFollowsTypeRule().check(source)
        assert violation.line == 5

    def test_trait_impls_are_treated_like_inherent_impls(self) -> None:
        """``impl Trait for T`` follows the same ordering rule."""
        source = rust("""
            struct Foo;

            const X: u8 = 1;

            impl Default for Foo {
                fn default() -> Self {
                    Foo
                }
            }
        """)
        assert len(ImplFollowsTypeRule().check(source)) == 1

    def test_consecutive_impls_after_the_type(self) -> None:
        """Several impls in a row directly after the type are fine."""
        source = rust("""
            /// A type.
            #[derive(Debug)]
            pub struct Foo<T>(T);

            impl<T> Foo<T> {}

            // Cloning
            impl<T: Clone> Clone for Foo<T> {
                fn clone(&self) -> Self {
                    Foo(self.0.clone())
                }
            }

            enum Bar {
                A,
            }
            impl Bar {}
        """)
        assert ImplFollowsTypeRule().check(source) == []

    def test_types_declared_elsewhere_are_ignored(self) -> None:
        """Impls for foreign types have nothing to follow."""
        source = rust("""
            use std::fmt;

            fn f() {}

            impl fmt::Display for External {
                fn fmt(&self, f: &mut fmt::Formatter<'_>) -> fmt::Result {
                    Ok(())
                }
            }
        """)
        assert ImplFollowsTypeRule().check(source) == []

    def test_duplicate_declarations_pair_with_nearest_preceding(self) -> None:
        """cfg-gated duplicates each own the impls that follow them."""
        source = rust("""
            #[cfg(unix)]
            struct Handle;
            #[cfg(unix)]
            impl Handle {}

            #[cfg(windows)]
            struct Handle;
            #[cfg(windows)]
            impl Handle {}
        """)
        assert ImplFollowsTypeRule().check(source) == []

    def test_code_sharing_the_line_is_manual(self) -> None:
        """An impl that shares a line with other code cannot be moved."""
        source = rust("""
            impl Foo {} fn g() {}
            struct Foo;
        """)
        [violation] = ImplFollowsTypeRule().check(source)
        assert not violation.fixable

    def test_skipped_impl_is_ignored(self) -> None:
        """``#[codestyle::skip]`` exempts the impl."""
        source = rust("""
            #[codestyle::skip]
            impl Foo {}

            struct Foo;
        """)
        assert ImplFollowsTypeRule().check(source) == []


class TestImplFollowsTypeFix:
    """Moving impl blocks under their type."""

    def test_impl_moves_below_struct(self) -> None:
        """Both bodies are kept byte for byte."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            impl Foo {
                fn new() -> Self {
                    Foo { x: 1 }
                }
            }

            struct Foo {
                x: i32,
            }
        """)
        assert fixed == source_text("""
            struct Foo {
                x: i32,
            }

            impl Foo {
                fn new() -> Self {
                    Foo { x: 1 }
                }
            }
        """)
        assert ImplFollowsTypeRule().check(rust(fixed)) == []

    def test_impl_moves_above_unrelated_item(self) -> None:
        """The unrelated item ends up after the impl."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            struct Foo;

            fn helper() {}

            impl Foo {}
        """)
        assert fixed == source_text("""
            struct Foo;

            impl Foo {}

            fn helper() {}
        """)

    def test_relative_order_of_impls_is_preserved(self) -> None:
        """Impls keep their original order once gathered under the type."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            impl Foo {
                fn a() {}
            }

            struct Foo;

            impl Clone for Foo {
                fn clone(&self) -> Self {
                    Foo
                }
            }
        """)
        assert fixed == source_text("""
            struct Foo;

            impl Foo {
                fn a() {}
            }

            impl Clone for Foo {
                fn clone(&self) -> Self {
                    Foo
                }
            }
        """)

    def test_attributes_and_docs_move_with_the_impl(self) -> None:
        """Leading trivia travels with the block."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            /// Docs
            #[allow(dead_code)]
            impl Foo {}

            struct Foo;
        """)
        assert fixed == source_text("""
            struct Foo;

            /// Docs
            #[allow(dead_code)]
            impl Foo {}
        """)

    def test_interleaved_types_converge(self) -> None:
        """Overlapping moves are spread over passes and still settle."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            struct A;

            struct B;

            impl A {}

            impl B {}
        """)
        assert ImplFollowsTypeRule().check(rust(fixed)) == []
        assert fixed.index("impl A") < fixed.index("struct B")

    def test_module_bodies_are_fixed(self) -> None:
        """Items inside inline modules are reordered within the module."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), """
            mod inner {
                impl Foo {}

                struct Foo;
            }
        """)
        assert ImplFollowsTypeRule().check(rust(fixed)) == []
        assert fixed.index("struct Foo") < fixed.index("impl Foo")

    def test_crlf_line_endings_are_kept(self) -> None:
        """The separator inserted before a moved impl uses the file's line ending."""
        fixed = fix_until_stable(ImplFollowsTypeRule(), "impl Foo {}\r\n\r\nstruct Foo;\r\n")
        assert fixed == "struct Foo;\r\n\r\nimpl Foo {}\r\n"

    def test_crlf_move_past_unrelated_item(self) -> None:
        """Moving over another item keeps every CRLF."""
        fixed = fix_until_stable(
            ImplFollowsTypeRule(), "struct Foo;\r\n\r\nfn helper() {}\r\n\r\nimpl Foo {}\r\n")
        assert fixed == "struct Foo;\r\n\r\nimpl Foo {}\r\n\r\nfn helper() {}\r\n"
        assert "\n" not in fixed.replace("\r\n", "")
