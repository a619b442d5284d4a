"""Static educational content served by GET /api/tips."""

EDUCATIONAL_TIPS: list[dict[str, str]] = [
    {
        "title": "What is PAYE?",
        "content": (
            "Pay As You Earn (PAYE) is a method of collecting Personal Income Tax (PIT) "
            "from employees' salaries and wages by their employers."
        ),
    },
    {
        "title": "Consolidated Relief Allowance (CRA)",
        "content": (
            "CRA is a tax-free allowance given to every taxpayer. It consists of the higher "
            "of ₦200,000 or 1% of gross income, plus 20% of the gross income."
        ),
    },
    {
        "title": "Allowable Deductions",
        "content": (
            "These include contributions to the Pension Fund, National Health Insurance "
            "Scheme (NHIS), and National Housing Fund (NHF), which are deducted before tax "
            "is calculated."
        ),
    },
    {
        "title": "Tax Residency",
        "content": (
            "You are liable to pay tax in Nigeria if you reside in the country for 183 days "
            "or more in a 12-month period."
        ),
    },
]
