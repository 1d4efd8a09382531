"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Lookup errors
    # ------------------------------------------------------------------

    @staticmethod
    def resource_not_found(resource_id: int | str, locale: str) -> Diagnostic:
        """String resource not found in the resolution context.

        Args:
            resource_id: The identifier that was looked up
            locale: Locale of the context

        Returns:
            Diagnostic for RESOURCE_NOT_FOUND
        """
        msg = f"Resource '{resource_id}' not found for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=msg,
            hint="Check that the string resource is defined in the catalog",
            resource_id=str(resource_id),
            locale=locale,
        )

    @staticmethod
    def plural_resource_not_found(resource_id: int | str, locale: str) -> Diagnostic:
        """Plural resource not found in the resolution context.

        Args:
            resource_id: The plural identifier that was looked up
            locale: Locale of the context

        Returns:
            Diagnostic for PLURAL_RESOURCE_NOT_FOUND
        """
        msg = f"Plural resource '{resource_id}' not found for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.PLURAL_RESOURCE_NOT_FOUND,
            message=msg,
            hint="Check that the plural resource is defined in the catalog",
            resource_id=str(resource_id),
            locale=locale,
        )

    @staticmethod
    def plural_category_not_found(
        resource_id: int | str, category: str, locale: str
    ) -> Diagnostic:
        """Plural resource exists but has neither the category nor 'other'.

        Args:
            resource_id: The plural identifier
            category: CLDR plural category selected for the quantity
            locale: Locale of the context

        Returns:
            Diagnostic for PLURAL_CATEGORY_NOT_FOUND
        """
        msg = (
            f"Plural resource '{resource_id}' has no '{category}' "
            f"or 'other' variant for locale '{locale}'"
        )
        return Diagnostic(
            code=DiagnosticCode.PLURAL_CATEGORY_NOT_FOUND,
            message=msg,
            hint="Every plural resource should define an 'other' variant",
            resource_id=str(resource_id),
            locale=locale,
        )

    @staticmethod
    def separator_not_found(resource_id: int | str, locale: str) -> Diagnostic:
        """Join separator resource not found.

        Args:
            resource_id: The separator identifier
            locale: Locale of the context

        Returns:
            Diagnostic for SEPARATOR_NOT_FOUND
        """
        msg = f"Separator '{resource_id}' not found for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.SEPARATOR_NOT_FOUND,
            message=msg,
            hint="Use the null resource id to join with a single space",
            resource_id=str(resource_id),
            locale=locale,
        )

    # ------------------------------------------------------------------
    # Format errors
    # ------------------------------------------------------------------

    @staticmethod
    def placeholder_invalid(template: str, position: int, detail: str) -> Diagnostic:
        """Template contains a placeholder outside the supported set.

        Args:
            template: The template being formatted
            position: Character offset of the offending '%'
            detail: What was wrong with the placeholder

        Returns:
            Diagnostic for PLACEHOLDER_INVALID
        """
        msg = f"Invalid placeholder at position {position}: {detail}"
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_INVALID,
            message=msg,
            hint="Supported conversions are %s, %d, %f and %%",
            template=template,
        )

    @staticmethod
    def argument_missing(template: str, index: int, available: int) -> Diagnostic:
        """Placeholder references an argument that was not supplied.

        Args:
            template: The template being formatted
            index: 1-based argument index requested by the placeholder
            available: Number of arguments supplied

        Returns:
            Diagnostic for ARGUMENT_MISSING
        """
        msg = f"Placeholder requires argument {index} but only {available} supplied"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_MISSING,
            message=msg,
            hint="Pass one argument per placeholder, in placeholder order",
            template=template,
        )

    @staticmethod
    def argument_unused(template: str, unused: list[int]) -> Diagnostic:
        """Arguments were supplied that no placeholder consumes.

        Args:
            template: The template being formatted
            unused: 1-based indexes of unused arguments

        Returns:
            Diagnostic for ARGUMENT_UNUSED
        """
        indexes = ", ".join(str(i) for i in unused)
        msg = f"Argument(s) {indexes} not used by template"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_UNUSED,
            message=msg,
            hint="Remove the extra arguments or add matching placeholders",
            template=template,
        )

    @staticmethod
    def argument_type_mismatch(
        template: str, index: int, conversion: str, received: str
    ) -> Diagnostic:
        """Argument kind is incompatible with its placeholder conversion.

        Args:
            template: The template being formatted
            index: 1-based argument index
            conversion: Conversion character of the placeholder
            received: Description of the supplied argument

        Returns:
            Diagnostic for ARGUMENT_TYPE_MISMATCH
        """
        msg = f"Conversion '%{conversion}' cannot format argument {index} ({received})"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_TYPE_MISMATCH,
            message=msg,
            hint="Use %d for integers, %f for numbers and %s for anything",
            template=template,
        )

    @staticmethod
    def number_format_failed(value: int | float, locale: str, detail: str) -> Diagnostic:
        """Locale-aware number formatting failed.

        Args:
            value: The number being formatted
            locale: Locale of the context
            detail: Underlying error description

        Returns:
            Diagnostic for NUMBER_FORMAT_FAILED
        """
        msg = f"Number formatting failed for '{value}' in locale '{locale}': {detail}"
        return Diagnostic(
            code=DiagnosticCode.NUMBER_FORMAT_FAILED,
            message=msg,
            locale=locale,
        )

    # ------------------------------------------------------------------
    # Encoding errors
    # ------------------------------------------------------------------

    @staticmethod
    def encoding_truncated(offset: int, needed: int, available: int) -> Diagnostic:
        """Buffer ended before a field was complete.

        Args:
            offset: Byte offset of the incomplete field
            needed: Bytes required by the field
            available: Bytes remaining in the buffer

        Returns:
            Diagnostic for ENCODING_TRUNCATED
        """
        msg = (
            f"Truncated encoding at offset {offset}: "
            f"needed {needed} byte(s), {available} available"
        )
        return Diagnostic(
            code=DiagnosticCode.ENCODING_TRUNCATED,
            message=msg,
            hint="The buffer was cut short in transport or storage",
            offset=offset,
        )

    @staticmethod
    def encoding_unknown_tag(offset: int, kind: str, tag: int) -> Diagnostic:
        """Discriminant byte outside the known range.

        Args:
            offset: Byte offset of the discriminant
            kind: What the byte discriminates (value, argument, resource id)
            tag: The byte that was read

        Returns:
            Diagnostic for ENCODING_UNKNOWN_TAG
        """
        msg = f"Unknown {kind} discriminant {tag} at offset {offset}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_UNKNOWN_TAG,
            message=msg,
            offset=offset,
        )

    @staticmethod
    def encoding_invalid_flag(offset: int, flag: int) -> Diagnostic:
        """Boolean byte other than 0 or 1.

        Args:
            offset: Byte offset of the flag
            flag: The byte that was read

        Returns:
            Diagnostic for ENCODING_INVALID_FLAG
        """
        msg = f"Invalid boolean flag {flag} at offset {offset}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_INVALID_FLAG,
            message=msg,
            offset=offset,
        )

    @staticmethod
    def encoding_invalid_text(offset: int, detail: str) -> Diagnostic:
        """String field is not valid UTF-8.

        Args:
            offset: Byte offset of the string payload
            detail: Decoder error description

        Returns:
            Diagnostic for ENCODING_INVALID_TEXT
        """
        msg = f"Invalid UTF-8 text at offset {offset}: {detail}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_INVALID_TEXT,
            message=msg,
            offset=offset,
        )

    @staticmethod
    def encoding_trailing_bytes(offset: int, count: int) -> Diagnostic:
        """Bytes left over after a complete value.

        Args:
            offset: Byte offset where the value ended
            count: Number of unread bytes

        Returns:
            Diagnostic for ENCODING_TRAILING_BYTES
        """
        msg = f"{count} trailing byte(s) after value ending at offset {offset}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_TRAILING_BYTES,
            message=msg,
            offset=offset,
        )

    @staticmethod
    def encoding_invalid_value(offset: int, detail: str) -> Diagnostic:
        """Decoded fields violate a constructor invariant.

        Args:
            offset: Byte offset of the value
            detail: Constructor error description

        Returns:
            Diagnostic for ENCODING_INVALID_VALUE
        """
        msg = f"Invalid value at offset {offset}: {detail}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_INVALID_VALUE,
            message=msg,
            offset=offset,
        )

    @staticmethod
    def encoding_length_exceeded(offset: int, length: int, limit: int) -> Diagnostic:
        """Length or count prefix larger than the codec accepts.

        Args:
            offset: Byte offset of the length prefix
            length: The length that was read
            limit: The maximum accepted length

        Returns:
            Diagnostic for ENCODING_LENGTH_EXCEEDED
        """
        msg = f"Length prefix {length} at offset {offset} exceeds limit {limit}"
        return Diagnostic(
            code=DiagnosticCode.ENCODING_LENGTH_EXCEEDED,
            message=msg,
            offset=offset,
        )

    # ------------------------------------------------------------------
    # Recursion errors
    # ------------------------------------------------------------------

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested value depth limit exceeded.

        Args:
            max_depth: The configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Nested deferred text this deep is almost certainly malformed",
        )
