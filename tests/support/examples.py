from efx import Interface, delegate_effect, effect


class EfxExample(Interface):
    @effect
    def get() -> list:
        return [1, 2, 3, 4, 5]

    @effect
    def append_get(arg) -> list:
        return [1, 2, 3, 4, 5] + [arg]

    @effect
    def one_liner(a):
        return a

    @effect
    def with_default_args(name: str = "user 123", greeting: str = "Hello") -> str:
        return greeting + " " + name

    @effect
    def with_rescue() -> str:
        try:
            raise ValueError("oh noes")
        except ValueError as error:
            return str(error)

    @effect
    async def fetch(key: str) -> str:
        return f"fetched {key}"

    to_upper = delegate_effect(str.upper, arities=[1])


class EfxOmnipresentExample(Interface):
    @effect
    def get() -> list:
        return [1, 2, 3, 4, 5]

    @effect
    def another_get() -> list:
        return ["hello", "world"]


class Counter(Interface):
    @effect
    def increment(step):
        return step
