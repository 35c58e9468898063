from headings.ui import H1, H2, H3, H4, Section, component, el


@component
def Hero(*, scope, headline: str, tagline: str):
    return el(
        "section",
        H1(headline, scope=scope, id="hero-title", class_name="uppercase text-center"),
        el("p", tagline, class_name="hero-tagline"),
        class_name="hero",
        id="hero",
    )


@component
def ProblemSolution(*, scope, problems: list[dict[str, str]], solutions: list[dict[str, str]]):
    return el(
        "section",
        H2("Why most plans fail", scope=scope, id="problem-solution"),
        _column(scope, "The problem", problems, "#f87171"),
        _column(scope, "The solution", solutions, "#ccff00"),
        class_name="problem-solution",
    )


def _column(scope, title: str, items: list[dict[str, str]], accent: str):
    return el(
        "div",
        H3(title, scope=scope, style={"color": accent}),
        [el("article", H4(item["title"], scope=scope), el("p", item["body"])) for item in items],
        class_name="problem-solution-column",
    )


@component
def Services(*, scope, services: list[dict[str, str]]):
    return el(
        "section",
        H2("Plans", scope=scope, id="services"),
        [el("article", H3(s["title"], scope=scope), el("p", s["price"])) for s in services],
        class_name="services",
    )


@component
def Testimonials(*, scope, testimonials: list[dict[str, str]]):
    return el(
        "section",
        H2("Results", scope=scope, id="testimonials"),
        [
            el("blockquote", H3(t["name"], scope=scope), el("p", t["quote"]))
            for t in testimonials
        ],
        class_name="testimonials",
    )


@component
def FAQ(*, scope, faq: list[dict[str, str]]):
    return el(
        "section",
        H2("Frequently asked questions", scope=scope, id="faq"),
        [el("details", el("summary", item["question"]), el("p", item["answer"])) for item in faq],
        class_name="faq",
    )


@component
def Footer(*, scope, brand: str):
    # Footer headings sit at level 2 next to the main sections.
    return Section(
        el("p", f"(c) {brand}"),
        heading="Contact",
        heading_level=2,
        scope=scope,
        class_name="footer",
    )
