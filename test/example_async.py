# Uses top-level await, so bdd-inventory loads it with the asynchronous form.
import asyncio

await asyncio.sleep(0)

it("atest-0", lambda: print("won't execute"))


@describe("asuite-1")
def asuite_1():
    @before_each
    def setup():
        print("won't execute")

    it("test-1", lambda: print("won't execute"))


@describe.only("asuite-2")
async def asuite_2():
    it.only("test-2.1", lambda: print("won't execute"))
