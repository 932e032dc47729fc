class EmailPromptBuilder:
    """
    Stateless builder for the email generation prompt.
    The returned string is sent as-is to the generative model.
    """

    EMAIL_START_TAG = "ENGLISH_EMAIL_START"
    EMAIL_END_TAG = "ENGLISH_EMAIL_END"
    MAPPING_START_TAG = "MAPPING_START"
    MAPPING_END_TAG = "MAPPING_END"

    EXAMPLE_INSTRUCTION = "मुझे आज छुट्टी चाहिए।"
    EXAMPLE_EMAIL = (
        "Subject: Leave Request\n"
        "\n"
        "Dear Manager,\n"
        "\n"
        "I need leave today.\n"
        "\n"
        "Best regards,\n"
        "[Your Name]"
    )
    EXAMPLE_MAPPING = ["मुझे आज छुट्टी चाहिए। -> I need a leave today."]

    # --------------------------------------------------
    # Sections
    # --------------------------------------------------
    @classmethod
    def _format_contract(cls) -> str:
        return (
            "Respond using EXACTLY the following format and nothing else:\n"
            f"{cls.EMAIL_START_TAG}\n"
            "<the complete English email, including a Subject line>\n"
            f"{cls.EMAIL_END_TAG}\n"
            "\n"
            f"{cls.MAPPING_START_TAG}\n"
            "<one line per Hindi sentence, written as: Hindi sentence -> English translation>\n"
            f"{cls.MAPPING_END_TAG}\n"
            "\n"
            "Rules:\n"
            "1. Put each tag on its own line\n"
            "2. Do not wrap the output in markdown or code fences\n"
            "3. Keep the mapping in the same order as the Hindi instruction"
        )

    @classmethod
    def _format_example(cls) -> str:
        mapping = "\n".join(cls.EXAMPLE_MAPPING)
        return (
            "Example:\n"
            "Hindi Instruction:\n"
            f"{cls.EXAMPLE_INSTRUCTION}\n"
            "\n"
            "Output:\n"
            f"{cls.EMAIL_START_TAG}\n"
            f"{cls.EXAMPLE_EMAIL}\n"
            f"{cls.EMAIL_END_TAG}\n"
            "\n"
            f"{cls.MAPPING_START_TAG}\n"
            f"{mapping}\n"
            f"{cls.MAPPING_END_TAG}"
        )

    # --------------------------------------------------
    # Public API
    # --------------------------------------------------
    @classmethod
    def build_email_prompt(cls, hindi_text: str, include_example: bool = True) -> str:
        """
        Wrap a Hindi instruction in the fixed email-writing template.

        Args:
            hindi_text: Hindi instruction, interpolated verbatim
            include_example: append a worked example to steer the output format

        Returns:
            Prompt string for the generative model
        """
        if not hindi_text or not hindi_text.strip():
            raise ValueError("Hindi instruction must not be empty")

        sections = [
            "You are an expert email writer. Your task is to generate a professional email "
            "in English based on the provided Hindi instructions.\n"
            "The email should be clear, concise, and suitable for a professional context.\n"
            "Also give a line-by-line mapping from each Hindi sentence to its English meaning.",
            cls._format_contract(),
        ]
        if include_example:
            sections.append(cls._format_example())
        sections.append(f"Hindi Instruction:\n{hindi_text}")

        return "\n\n".join(sections)
