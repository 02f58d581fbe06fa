import re
from typing import Optional


class MerchantExtractor:
    def __init__(self, max_length: int = 50, min_token_length: int = 3):
        # Transaction-type words banks put in front of the payee
        self.type_prefixes = [
            "DEBIT",
            "CREDIT",
            "TRANSACTION",
            "CHECK",
            "ACH",
            "TRANSFER",
            "WITHDRAWAL",
            "DEPOSIT",
        ]
        self.prefix_pattern = re.compile(
            r"^(?:" + "|".join(self.type_prefixes) + r")\b[\s-]*",
            re.IGNORECASE,
        )
        self.separator_pattern = re.compile(r"[\s-]")
        self.max_length = max_length
        self.min_token_length = min_token_length

    def extract(self, raw_description: Optional[str]) -> str:
        if not raw_description:
            return ""

        # Strategy 1: drop a leading type word ("ACH", "DEBIT - ", ...)
        remainder = self.prefix_pattern.sub("", str(raw_description).strip()).strip()

        # Strategy 2: first token long enough to be a name, skipping "OF", "TO"
        merchant = remainder
        for token in self.separator_pattern.split(remainder):
            if len(token) >= self.min_token_length:
                merchant = token
                break

        return merchant[: self.max_length]
