import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from repo_records import RecordRepo
from service_records import ProgressService
from settings import settings


async def main():
    print('Counting records in schema', settings.schema_id)
    counts = await ProgressService(RecordRepo()).count_by_user()
    for user_id, n in sorted(counts.items(), key=lambda kv: kv[1], reverse=True):
        print(f'  {n:6d}  {user_id}')
    print('total records:', sum(counts.values()))


if __name__ == '__main__':
    asyncio.run(main())
